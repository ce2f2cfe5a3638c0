# utils/hex_parity.py
"""
Parity-based neighbor calculation for ODD-Q hexagonal grids.

ODD-Q Convention (flat-top hexagons, x = column, y = row):
- Even columns (0, 2, 4...) are at the base alignment
- Odd columns (1, 3, 5...) are shifted DOWN by half a hexagon height

This means:
- EVEN column cells: diagonal neighbors lean UP (row same or -1)
- ODD column cells: diagonal neighbors lean DOWN (row same or +1)

Edges are numbered clockwise from north: 0=N, 1=NE, 2=SE, 3=S, 4=SW, 5=NW.
Edge i of a tile touches edge (i + 3) % 6 of the neighbor across it.

Reference: Red Blob Games hexagonal grid guide
https://www.redblobgames.com/grids/hexagons/
"""

from __future__ import annotations
from typing import List, Optional, Tuple

EDGE_COUNT = 6

# Deltas for EVEN columns (x % 2 == 0), in edge order
_EVEN_DELTAS: Tuple[Tuple[int, int], ...] = (
    ( 0, -1),  # north
    ( 1, -1),  # north-east (row -1)
    ( 1,  0),  # south-east (same row)
    ( 0,  1),  # south
    (-1,  0),  # south-west (same row)
    (-1, -1),  # north-west (row -1)
)

# Deltas for ODD columns (x % 2 == 1), in edge order
_ODD_DELTAS: Tuple[Tuple[int, int], ...] = (
    ( 0, -1),  # north
    ( 1,  0),  # north-east (same row)
    ( 1,  1),  # south-east (row +1)
    ( 0,  1),  # south
    (-1,  1),  # south-west (row +1)
    (-1,  0),  # north-west (same row)
)


def opposite_edge(edge: int) -> int:
    """Index of the same physical edge as seen from the neighbor."""
    return (edge + 3) % EDGE_COUNT


def get_hex_neighbors_oddq(
    columns: int,
    rows: int,
    x: int,
    y: int,
) -> List[Optional[Tuple[int, int]]]:
    """
    Return the six neighbor coordinates of (x, y) on a rectangular
    ODD-Q grid, in edge order.

    Args:
        columns: Column count of the grid
        rows: Row count of the grid
        x: Column index (0-based)
        y: Row index (0-based)

    Returns:
        List of six entries; (x, y) pairs for neighbors inside the grid,
        None where the edge faces the grid boundary

    Raises:
        AssertionError: If coordinates are out of bounds
    """
    assert 0 <= x < columns, f"column {x} out of range [0, {columns})"
    assert 0 <= y < rows, f"row {y} out of range [0, {rows})"

    # Select delta pattern based on column parity
    deltas = _ODD_DELTAS if (x % 2 == 1) else _EVEN_DELTAS

    neighbors: List[Optional[Tuple[int, int]]] = []
    for dx, dy in deltas:
        nx, ny = x + dx, y + dy
        if 0 <= nx < columns and 0 <= ny < rows:
            neighbors.append((nx, ny))
        else:
            neighbors.append(None)

    return neighbors
