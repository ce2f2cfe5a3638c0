"""
Full-grid resolution:
- Parity, shared-edge agreement and boundary closure on many shapes and seeds
- Islands cut off by forced tiles are still resolved
- A second pass changes nothing
- Tiles that break a rule are reopened and resolved again
- A broken pass is rolled back
"""

import pytest

from core.propagation import PropagationDriver
from core.random_source import PythonRandomSource
from core.tile_store import TileStore
from core.types import EdgeState, InvariantViolation
from core.validation import unsound_tiles, validate_store
from utils.hex_parity import opposite_edge

NO = EdgeState.NOT_CROSSING
YES = EdgeState.CROSSING

SHAPES = [(1, 1), (2, 1), (1, 2), (3, 3), (4, 7), (7, 4), (10, 10), (13, 5), (20, 20)]


def assert_valid_tiling(store: TileStore):
    for tile in store:
        assert not tile.needs_resolution(), f"{tile} left undetermined"
        assert len(tile.crossing_edges()) % 2 == 0, f"{tile} has odd parity"
        for edge, neighbor in enumerate(store.neighbors_of(tile.x, tile.y)):
            if neighbor is None:
                assert tile.edges[edge] == NO, f"{tile} crosses the boundary on edge {edge}"
            else:
                assert tile.edges[edge] == neighbor.edges[opposite_edge(edge)]


@pytest.mark.parametrize("columns,rows", SHAPES)
@pytest.mark.parametrize("seed", range(5))
def test_resolved_grid_is_a_valid_tiling(columns, rows, seed):
    store = TileStore(columns, rows)
    resolved = PropagationDriver(store, PythonRandomSource(seed)).resolve_all()

    assert resolved == columns * rows
    assert_valid_tiling(store)
    assert [e for e in validate_store(store) if e.severity == "error"] == []


def test_single_tile_resolves_empty():
    store = TileStore(1, 1)
    PropagationDriver(store, PythonRandomSource(123)).resolve_all()
    assert store.tile_at(0, 0).edges == [NO] * 6


def test_two_tiles_agree_and_stay_even_for_every_seed():
    # One shared edge and ten boundary edges: only the empty tiling is even
    for seed in range(20):
        store = TileStore(2, 1)
        PropagationDriver(store, PythonRandomSource(seed)).resolve_all()

        left, right = store.tile_at(0, 0), store.tile_at(1, 0)
        assert left.edges[2] == right.edges[5]
        assert left.crossing_edges() == []
        assert right.crossing_edges() == []


def test_large_grids_produce_crossings():
    store = TileStore(10, 10)
    PropagationDriver(store, PythonRandomSource(7)).resolve_all()
    assert sum(len(t.crossing_edges()) for t in store) > 0


def test_islands_separated_by_forced_tiles_are_resolved():
    store = TileStore(5, 6)
    for y in range(6):
        store.toggle_force(2, y)

    PropagationDriver(store, PythonRandomSource(3)).resolve_all()

    assert_valid_tiling(store)
    for y in range(6):
        assert store.tile_at(2, y).edges == [NO] * 6


def test_seed_on_forced_tile_still_resolves_everything(scripted_random):
    store = TileStore(3, 3)
    store.toggle_force(0, 0)

    # Always answering 0 puts the seed on the forced corner
    PropagationDriver(store, scripted_random([])).resolve_all()

    assert_valid_tiling(store)
    assert store.tile_at(0, 0).forced


def test_second_pass_changes_nothing():
    store = TileStore(8, 6)
    driver = PropagationDriver(store, PythonRandomSource(11))
    driver.resolve_all()
    before = store.snapshot()

    assert driver.resolve_all() == 0
    assert store.snapshot() == before


def test_discovery_lists_each_tile_after_its_discoverer():
    store = TileStore(6, 5)
    driver = PropagationDriver(store, PythonRandomSource(0))
    order = driver.discover((2, 2), set())

    assert order[0] == (2, 2)
    assert sorted(order) == sorted(store.coordinates())
    seen = {order[0]}
    for coord in order[1:]:
        neighbors = [c for c in store.neighbor_coordinates(*coord) if c is not None]
        assert any(n in seen for n in neighbors)
        seen.add(coord)


def loop_store():
    """3x3 store holding a valid four-tile loop, everything else closed."""
    store = TileStore(3, 3)
    for tile in store:
        tile.edges = [NO] * 6
    for (x, y), edges in {(0, 0): (2, 3), (1, 0): (3, 5), (1, 1): (0, 5), (0, 1): (0, 2)}.items():
        for edge in edges:
            store.tiles[x][y].edges[edge] = YES
    return store


def test_loop_fixture_is_valid():
    assert_valid_tiling(loop_store())


def test_tile_crossing_the_boundary_is_reopened_alone():
    store = loop_store()
    store.tiles[2][2].edges[2] = YES
    store.tiles[2][2].edges[3] = YES
    loop = {coord: store.snapshot()[coord[0]][coord[1]] for coord in [(0, 0), (1, 0), (1, 1), (0, 1)]}

    assert unsound_tiles(store) == {(2, 2)}
    assert PropagationDriver(store, PythonRandomSource(0)).resolve_all() == 1

    assert_valid_tiling(store)
    assert store.tile_at(2, 2).edges == [NO] * 6
    for (x, y), saved in loop.items():
        assert store.snapshot()[x][y] == saved


def test_odd_tile_is_reopened_with_its_partner():
    store = TileStore(2, 1)
    # Right tile settled with a single crossing towards the open left tile
    store.tiles[1][0].edges = [NO, NO, NO, NO, NO, YES]

    PropagationDriver(store, PythonRandomSource(0)).resolve_all()

    assert_valid_tiling(store)
    assert store.tile_at(1, 0).crossing_edges() == []


def test_region_that_cannot_close_reopens_every_free_tile():
    store = TileStore(3, 1)
    store.tiles[0][0].edges = [NO, NO, YES, NO, NO, NO]
    store.tiles[1][0].edges = [NO, YES, NO, NO, NO, YES]
    store.tiles[2][0].edges = [NO, NO, NO, NO, YES, NO]

    driver = PropagationDriver(store, PythonRandomSource(0))
    assert driver.clear_unsound() == 3
    assert all(tile.needs_resolution() for tile in store)

    driver.resolve_all()
    # A single row only closes with no crossings at all
    assert_valid_tiling(store)
    assert all(tile.crossing_edges() == [] for tile in store)


def test_forced_tiles_are_never_reopened():
    store = TileStore(3, 3)
    store.toggle_force(1, 1)
    for tile in store:
        if not tile.forced:
            tile.edges = [YES] + [NO] * 5

    assert (1, 1) not in unsound_tiles(store)
    PropagationDriver(store, PythonRandomSource(4)).resolve_all()

    assert_valid_tiling(store)
    assert store.tile_at(1, 1).forced
    assert store.tile_at(1, 1).edges == [NO] * 6


def test_failed_pass_restores_previous_state(monkeypatch):
    store = TileStore(2, 2)
    before = store.snapshot()
    driver = PropagationDriver(store, PythonRandomSource(0))

    def broken_resolve(tile, neighbors):
        tile.edges = [YES] + [NO] * 5

    monkeypatch.setattr(driver.resolver, "resolve", broken_resolve)

    with pytest.raises(InvariantViolation):
        driver.resolve_all()

    assert store.snapshot() == before
    assert all(tile.needs_resolution() for tile in store)
