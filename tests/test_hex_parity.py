"""
ODD-Q topology:
- Neighbor tables for even and odd columns
- Boundary edges map to None
- Edge i of a tile is edge (i + 3) % 6 of the neighbor across it
"""

import pytest

from utils.hex_parity import get_hex_neighbors_oddq, opposite_edge


def test_even_column_neighbors():
    assert get_hex_neighbors_oddq(5, 5, 2, 2) == [
        (2, 1), (3, 1), (3, 2), (2, 3), (1, 2), (1, 1)
    ]


def test_odd_column_neighbors():
    assert get_hex_neighbors_oddq(5, 5, 1, 1) == [
        (1, 0), (2, 1), (2, 2), (1, 2), (0, 2), (0, 1)
    ]


def test_corner_tile_has_boundary_edges():
    assert get_hex_neighbors_oddq(3, 3, 0, 0) == [None, None, (1, 0), (0, 1), None, None]


def test_single_tile_has_no_neighbors():
    assert get_hex_neighbors_oddq(1, 1, 0, 0) == [None] * 6


@pytest.mark.parametrize("edge,expected", [(0, 3), (1, 4), (2, 5), (3, 0), (4, 1), (5, 2)])
def test_opposite_edge(edge, expected):
    assert opposite_edge(edge) == expected


@pytest.mark.parametrize("columns,rows", [(1, 4), (4, 1), (2, 2), (5, 6), (8, 3)])
def test_neighbor_relation_is_symmetric_across_opposite_edges(columns, rows):
    for x in range(columns):
        for y in range(rows):
            for edge, coord in enumerate(get_hex_neighbors_oddq(columns, rows, x, y)):
                if coord is None:
                    continue
                back = get_hex_neighbors_oddq(columns, rows, *coord)[opposite_edge(edge)]
                assert back == (x, y), f"edge {edge} of {(x, y)} does not lead back"


def test_out_of_bounds_coordinate_is_rejected():
    with pytest.raises(AssertionError):
        get_hex_neighbors_oddq(3, 3, 3, 0)
