"""
Public grid interface:
- Read-only tile snapshots and shape
- Forcing re-resolves the tiling around the forced tile
- Resize keeps the existing tiling, resolve_all after it repairs the seams
- Validation findings
"""

import pytest

from core.config import TruchetConfig
from core.random_source import PythonRandomSource
from core.truchet_grid import TruchetGrid
from core.types import EdgeState, OutOfBoundsError, TileSnapshot

U = EdgeState.UNDETERMINED
NO = EdgeState.NOT_CROSSING


def errors_of(grid):
    return [e for e in grid.validate_tiling() if e.severity == "error"]


def test_defaults_come_from_config():
    grid = TruchetGrid(config=TruchetConfig(columns=4, rows=6, seed=5))
    assert grid.get_grid_shape() == (4, 6)
    assert isinstance(grid.random_source, PythonRandomSource)
    assert grid.random_source.seed == 5


def test_get_tile_returns_snapshot(make_grid):
    grid = make_grid(3, 3)
    tile = grid.get_tile(1, 2)

    assert isinstance(tile, TileSnapshot)
    assert (tile.x, tile.y) == (1, 2)
    assert isinstance(tile.edges, tuple)
    assert len(tile.edges) == 6
    assert tile.forced is False


def test_get_tile_outside_grid_raises(make_grid):
    grid = make_grid(3, 3)
    with pytest.raises(OutOfBoundsError):
        grid.get_tile(3, 0)
    with pytest.raises(OutOfBoundsError):
        grid.toggle_force(0, -1)


def test_neighbor_coordinates_for_layout(make_grid):
    grid = make_grid(3, 3, resolve=False)
    assert grid.get_neighbor_coordinates(0, 0) == [None, None, (1, 0), (0, 1), None, None]


def test_fresh_grid_reports_warnings_only(make_grid):
    grid = make_grid(3, 3, resolve=False)
    findings = grid.validate_tiling()
    assert not grid.is_resolved()
    assert len(findings) == 9
    assert all(f.severity == "warning" for f in findings)


def test_resolved_grid_validates_clean(make_grid):
    grid = make_grid(9, 7, seed=4)
    assert grid.is_resolved()
    assert grid.validate_tiling() == []


def test_toggle_force_pins_tile_and_keeps_grid_valid(make_grid):
    grid = make_grid(6, 6, seed=1)

    grid.toggle_force(2, 3)

    assert grid.get_tile(2, 3).forced
    assert grid.get_tile(2, 3).edges == (NO,) * 6
    assert grid.is_resolved()
    assert errors_of(grid) == []


def test_forced_tile_survives_reset_and_resolve(make_grid):
    grid = make_grid(6, 6, seed=1)
    grid.toggle_force(2, 3)

    grid.reset(force=False)
    assert grid.get_tile(2, 3).edges == (NO,) * 6
    assert grid.get_tile(0, 0).edges == (U,) * 6

    grid.resolve_all()
    assert grid.get_tile(2, 3).edges == (NO,) * 6
    assert grid.get_tile(2, 3).forced


def test_releasing_a_tile_returns_it_to_the_tiling(make_grid):
    grid = make_grid(5, 5, seed=9)
    grid.toggle_force(1, 1)
    grid.toggle_force(1, 1)

    assert not grid.get_tile(1, 1).forced
    assert grid.is_resolved()
    assert errors_of(grid) == []


def test_resolve_all_twice_is_idempotent(make_grid):
    grid = make_grid(7, 5, seed=3)
    before = grid.tiles()
    grid.resolve_all()
    assert grid.tiles() == before


def test_resize_keeps_resolved_interior(make_grid):
    grid = make_grid(4, 4, seed=6)
    grid.toggle_force(3, 3)
    before = {(t.x, t.y): t for t in grid.tiles()}

    grid.resize(6, 5)
    assert grid.get_grid_shape() == (6, 5)
    for (x, y), tile in before.items():
        assert grid.get_tile(x, y) == tile
    # Seam tiles arrive already determined
    assert grid.is_resolved()


def test_resolve_all_after_resizing_unresolved_grid():
    grid = TruchetGrid(3, 3, random_source=PythonRandomSource(0))
    grid.resize(4, 4)

    assert grid.get_tile(3, 3).edges == (U,) * 6
    grid.resolve_all()

    assert grid.is_resolved()
    assert errors_of(grid) == []


def test_resolve_all_repairs_seams_of_resized_grid(make_grid):
    grid = make_grid(3, 3, seed=0)
    grid.toggle_force(1, 1)
    grid.resize(4, 4)

    # Even-column row seam crosses edge 4, which faces the left boundary at x=0
    assert grid.get_tile(0, 3).edges[4] == EdgeState.CROSSING
    assert errors_of(grid) != []

    grid.resolve_all()

    assert grid.is_resolved()
    assert errors_of(grid) == []
    assert grid.get_tile(1, 1).forced
    assert grid.get_tile(1, 1).edges == (NO,) * 6


def test_refresh_after_resize_produces_valid_tiling(make_grid):
    grid = make_grid(4, 4, seed=6)
    grid.resize(7, 6)
    grid.refresh()
    assert grid.is_resolved()
    assert errors_of(grid) == []


def test_regenerate_releases_forced_tiles(make_grid):
    grid = make_grid(5, 5, seed=2)
    grid.toggle_force(0, 0)
    grid.toggle_force(4, 4)

    grid.regenerate()

    assert grid.get_statistics()["forced_tiles"] == 0
    assert grid.is_resolved()
    assert errors_of(grid) == []


def test_same_seed_gives_same_tiling(make_grid):
    assert make_grid(8, 8, seed=42).tiles() == make_grid(8, 8, seed=42).tiles()
