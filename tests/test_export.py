"""
Image export:
- Every tile gets a background hexagon
- SVG and PNG files are written
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from core.random_source import PythonRandomSource
from core.types import EdgeState
from render.truchet_renderer_mpl import TruchetMplRenderer


def test_render_grid_draws_one_background_per_tile(make_grid):
    grid = make_grid(4, 3, seed=5)
    renderer = TruchetMplRenderer(PythonRandomSource(0))

    ax = renderer.render_grid(grid)
    try:
        backgrounds = [p for p in ax.patches if p.get_zorder() == 1]
        assert len(backgrounds) == 12
        # Two strokes per crossing pair
        pairs = sum(t.edges.count(EdgeState.CROSSING) // 2 for t in grid.tiles())
        assert len(ax.lines) == 2 * pairs
    finally:
        plt.close(ax.figure)


def test_save_writes_svg_and_png(make_grid, tmp_path):
    grid = make_grid(3, 3, seed=1)
    renderer = TruchetMplRenderer(PythonRandomSource(0), scale=60)

    svg = renderer.save(grid, tmp_path / "tiling.svg")
    png = renderer.save(grid, tmp_path / "tiling.out", fmt="png")

    assert svg.read_text().lstrip().startswith("<?xml")
    assert png.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
