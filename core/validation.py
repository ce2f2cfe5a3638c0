"""
Tiling validation: parity, shared-edge agreement and boundary closure.
"""
from typing import List, Set, Tuple

from core.tile_store import TileStore
from core.types import EdgeState, ValidationError
from utils.hex_parity import opposite_edge


def validate_store(store: TileStore) -> List[ValidationError]:
    """
    Return a list[ValidationError]. No "error" entries == valid tiling.

    Rules (hard errors):
    - A fully determined tile has an even number of crossing edges
    - Both sides of a shared edge agree once both are determined
    - An edge facing the grid boundary is never crossing
    Tiles that still hold undetermined edges are reported as warnings.
    """
    errors: List[ValidationError] = []

    for tile in store:
        location = (tile.x, tile.y)

        if tile.needs_resolution():
            errors.append(ValidationError("warning", "Tile has undetermined edges", location=location))
        elif len(tile.crossing_edges()) % 2 == 1:
            errors.append(ValidationError(
                "error",
                f"Odd number of crossings ({len(tile.crossing_edges())})",
                location=location
            ))

        for edge, coord in enumerate(store.neighbor_coordinates(tile.x, tile.y)):
            mine = tile.edges[edge]
            if coord is None:
                if mine == EdgeState.CROSSING:
                    errors.append(ValidationError(
                        "error",
                        f"Edge {edge} crosses the grid boundary",
                        location=location
                    ))
                continue

            # Each shared edge is checked once, from its lower-numbered side
            if edge >= 3:
                continue
            theirs = store.tiles[coord[0]][coord[1]].edges[opposite_edge(edge)]
            if EdgeState.UNDETERMINED in (mine, theirs):
                continue
            if mine != theirs:
                errors.append(ValidationError(
                    "error",
                    f"Edge {edge} disagrees with neighbor {coord}",
                    location=location
                ))

    return errors


def unsound_tiles(store: TileStore) -> Set[Tuple[int, int]]:
    """
    Coordinates of non-forced tiles that break a hard rule.

    Unlike validate_store, a disagreement on a shared edge marks the tiles on
    both sides, since either one may be the culprit.
    """
    unsound: Set[Tuple[int, int]] = set()

    for tile in store:
        location = (tile.x, tile.y)
        if not tile.needs_resolution() and len(tile.crossing_edges()) % 2 == 1:
            unsound.add(location)

        for edge, coord in enumerate(store.neighbor_coordinates(tile.x, tile.y)):
            mine = tile.edges[edge]
            if coord is None:
                if mine == EdgeState.CROSSING:
                    unsound.add(location)
                continue
            theirs = store.tiles[coord[0]][coord[1]].edges[opposite_edge(edge)]
            if EdgeState.UNDETERMINED not in (mine, theirs) and mine != theirs:
                unsound.add(location)

    return {(x, y) for x, y in unsound if not store.tiles[x][y].forced}
