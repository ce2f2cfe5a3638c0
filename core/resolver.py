"""
Edge resolver: tightens one tile's edges against its neighbors and
settles what is left with a parity-respecting random choice.
"""
import logging
from typing import List, Optional, Sequence

from core.random_source import RandomSource
from core.tile_store import Tile
from core.types import EdgeState, InvariantViolation
from utils.hex_parity import EDGE_COUNT, opposite_edge

logger = logging.getLogger(__name__)


class EdgeResolver:
    """
    Resolves the edges of a single tile.

    Only the tile passed in is mutated; carrying its new values into the
    neighbors is the propagation driver's job.
    """

    def __init__(self, random_source: RandomSource):
        self.random_source = random_source

    def resolve(self, tile: Tile, neighbors: Sequence[Optional[Tile]]) -> None:
        """
        Resolve tile.edges in place.

        Args:
            tile: Tile to resolve
            neighbors: Six live neighbor tiles in edge order, None at the boundary

        Raises:
            InvariantViolation: If the tile ends fully determined with an odd
                number of crossing edges
        """
        if len(neighbors) != EDGE_COUNT:
            raise ValueError(f"Expected {EDGE_COUNT} neighbors, got {len(neighbors)}")

        yesses: List[int] = []
        possibles: List[int] = []

        for edge, neighbor in enumerate(neighbors):
            if neighbor is None:
                tile.edges[edge] = EdgeState.NOT_CROSSING
                continue

            theirs = neighbor.edges[opposite_edge(edge)]
            if theirs == EdgeState.CROSSING:
                # A NOT_CROSSING edge is overwritten here as well; the
                # neighbor's decision wins.
                tile.edges[edge] = EdgeState.CROSSING
                yesses.append(edge)
            elif theirs == EdgeState.NOT_CROSSING:
                tile.edges[edge] = EdgeState.NOT_CROSSING
            elif tile.edges[edge] == EdgeState.CROSSING:
                yesses.append(edge)
            elif tile.edges[edge] == EdgeState.UNDETERMINED:
                possibles.append(edge)

        if possibles:
            self._choose(tile, yesses, possibles)

        if not tile.needs_resolution() and len(tile.crossing_edges()) % 2 == 1:
            raise InvariantViolation(
                f"Tile ({tile.x}, {tile.y}) resolved with an odd number of crossings: "
                f"{tile.crossing_edges()}"
            )

    def _choose(self, tile: Tile, yesses: List[int], possibles: List[int]) -> None:
        """Turn candidates into crossings so the tile total stays even."""
        usable = len(possibles)
        if len(yesses) % 2 != usable % 2:
            usable -= 1

        self.random_source.shuffle(possibles)
        for rank, edge in enumerate(possibles):
            tile.edges[edge] = EdgeState.CROSSING if rank < usable else EdgeState.NOT_CROSSING

        logger.debug(
            "Tile (%d, %d): %d fixed crossings, %d of %d candidates crossing",
            tile.x, tile.y, len(yesses), usable, len(possibles),
        )
