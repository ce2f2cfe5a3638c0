# render/truchet_renderer_mpl.py
"""
Truchet Grid Renderer for image export.
Draws a resolved grid with matplotlib patches and saves it as SVG or PNG.

Key features:
- Same unit-tile geometry as the Tkinter canvas
- Forced tiles drawn with a darker background
- Unpaired crossings (never expected) drawn as caps
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import matplotlib.patches as patches

from core.random_source import RandomSource
from core.truchet_grid import TruchetGrid
from render.geometry import HEX_RADIUS, LINE_WIDTH, TruchetGeometry, pair_crossings

logger = logging.getLogger(__name__)


class TruchetMplRenderer:
    """
    Render a Truchet grid using matplotlib.
    Works in unit-tile space; the figure size follows the display scale.
    """

    def __init__(self, rng: RandomSource, scale: float = 100.0, dpi: int = 100):
        """
        Initialize the renderer.

        Args:
            rng: Random source used to pair crossing edges inside a tile
            scale: Display scale, as used by the canvas
            dpi: Resolution for raster output
        """
        self.rng = rng
        self.geometry = TruchetGeometry(scale)
        self.dpi = dpi

        self.background = "#f4efe6"
        self.forced_background = "#c9c2b6"
        self.outline = "#1f2a44"
        self.line = "#e8a33d"

    def _hexagon(self, cx: float, cy: float) -> np.ndarray:
        """Corners of the flat-top hexagon centred at (cx, cy)."""
        angles = np.pi / 6 + np.arange(6) * np.pi / 3
        return np.column_stack([cx + np.sin(angles) * HEX_RADIUS, cy + np.cos(angles) * HEX_RADIUS])

    def _shift(self, cx: float, cy: float, points: Sequence[Tuple[float, float]]) -> np.ndarray:
        return np.asarray(points, dtype=float) + np.array([cx, cy])

    def _linewidth(self, width: float) -> float:
        """Unit-space width to points at the figure scale."""
        return width * self.geometry.factor * 72.0 / self.dpi

    def render_grid(self, grid: TruchetGrid, ax=None):
        """
        Draw every tile of the grid.

        Args:
            grid: Grid to draw
            ax: Optional matplotlib axis (creates new figure if None)

        Returns:
            Matplotlib axis object
        """
        columns, rows = grid.get_grid_shape()
        width, height = self.geometry.canvas_size(columns, rows)

        if ax is None:
            import matplotlib.pyplot as plt
            _, ax = plt.subplots(figsize=(width / self.dpi, height / self.dpi), dpi=self.dpi)

        for tile in grid.tiles():
            cx, cy = self.geometry.tile_center(tile.x, tile.y)
            face = self.forced_background if tile.forced else self.background
            ax.add_patch(patches.Polygon(
                self._hexagon(cx, cy), closed=True,
                facecolor=face, edgecolor='none', zorder=1
            ))

            pairs, leftovers = pair_crossings(tile, self.rng)
            for ia, ib in pairs:
                for overlap, color, lw, z in (
                    (0, self.outline, LINE_WIDTH + 8, 2),
                    (1, self.line, LINE_WIDTH, 3),
                ):
                    path = self._shift(cx, cy, self.geometry.truchet_path(ia, ib, overlap))
                    ax.plot(
                        path[:, 0], path[:, 1], color=color,
                        linewidth=self._linewidth(lw),
                        solid_capstyle='butt', solid_joinstyle='round', zorder=z
                    )
            for edge in leftovers:
                ax.add_patch(patches.Polygon(
                    self._shift(cx, cy, self.geometry.cap_points(edge)), closed=True,
                    facecolor=self.line, edgecolor=self.outline, zorder=4
                ))

        # Unit-space bounds of the drawing
        unit_w = width / self.geometry.factor
        unit_h = height / self.geometry.factor
        ax.set_aspect('equal')
        ax.set_xlim(0, unit_w)
        ax.set_ylim(unit_h, 0)  # Invert Y to match screen convention
        ax.axis('off')

        return ax

    def save(self, grid: TruchetGrid, path: Union[str, Path], fmt: Optional[str] = None) -> Path:
        """
        Render the grid and write it to disk.

        Args:
            grid: Grid to draw
            path: Target file; the suffix picks the format unless fmt is given
            fmt: Optional explicit format ('svg', 'png', ...)

        Returns:
            The written path
        """
        import matplotlib.pyplot as plt

        path = Path(path)
        ax = self.render_grid(grid)
        fig = ax.figure
        fig.subplots_adjust(left=0, right=1, top=1, bottom=0)
        try:
            fig.savefig(path, format=fmt, dpi=self.dpi, transparent=True)
        finally:
            plt.close(fig)

        logger.info("Exported %dx%d tiling to %s", *grid.get_grid_shape(), path)
        return path
