"""
Propagation driver: flood-fills the grid from a random seed tile and runs
the edge resolver until no tile is left undetermined.
"""
import logging
from typing import List, Set, Tuple

from core.random_source import RandomSource
from core.resolver import EdgeResolver
from core.tile_store import TileStore
from core.types import EdgeState, InvariantViolation
from core.validation import unsound_tiles, validate_store
from utils.hex_parity import opposite_edge

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class PropagationDriver:
    """
    Resolves every tile of a store.

    The walk uses an explicit stack. Tiles are resolved in reverse discovery
    order: every tile except the seed still has an undetermined neighbor
    (the tile that discovered it) when its turn comes, so it can always
    balance its parity. The seed is resolved last, when all of its edges are
    fixed by neighbors, and is even because every other tile is and the
    crossings entering the region from outside are even in number.
    """

    def __init__(self, store: TileStore, random_source: RandomSource):
        self.store = store
        self.random_source = random_source
        self.resolver = EdgeResolver(random_source)

    def _needs_resolution(self, coord: Coord) -> bool:
        return self.store.tiles[coord[0]][coord[1]].needs_resolution()

    def pick_seed(self) -> Coord:
        """Random in-bounds coordinate to start the walk from."""
        return (
            self.random_source.random_int(self.store.columns),
            self.random_source.random_int(self.store.rows),
        )

    def discover(self, start: Coord, settled: Set[Coord]) -> List[Coord]:
        """
        Collect the tiles reachable from start that need resolution.

        A tile is marked settled when first pushed, so the stack never holds
        it twice; the loop ends when the stack empties.

        Returns:
            Coordinates in discovery order; each tile appears after the tile
            that discovered it
        """
        order: List[Coord] = []
        settled.add(start)
        stack = [start]

        while stack:
            current = stack.pop()
            order.append(current)
            for coord in self.store.neighbor_coordinates(*current):
                if coord is None or coord in settled:
                    continue
                if self._needs_resolution(coord):
                    settled.add(coord)
                    stack.append(coord)

        return order

    def _open_regions(self) -> List[Set[Coord]]:
        """Connected groups of tiles that need resolution."""
        regions: List[Set[Coord]] = []
        seen: Set[Coord] = set()
        for start in self.store.coordinates():
            if start in seen or not self._needs_resolution(start):
                continue
            regions.append(set(self.discover(start, seen)))
        return regions

    def _entering_crossings(self, region: Set[Coord]) -> int:
        """Crossings that determined tiles outside the region point into it."""
        count = 0
        for x, y in region:
            for edge, neighbor in enumerate(self.store.neighbors_of(x, y)):
                if neighbor is None or (neighbor.x, neighbor.y) in region:
                    continue
                if neighbor.edges[opposite_edge(edge)] == EdgeState.CROSSING:
                    count += 1
        return count

    def clear_unsound(self) -> int:
        """
        Reopen non-forced tiles that break a hard rule.

        A region whose surroundings point an odd number of crossings into it
        can never be closed from inside, so in that case every non-forced
        tile is reopened instead.

        Returns:
            Number of tiles reopened
        """
        unsound = unsound_tiles(self.store)
        if not unsound:
            return 0

        for x, y in unsound:
            self.store.tiles[x][y].clear()

        if any(self._entering_crossings(region) % 2 for region in self._open_regions()):
            self.store.reset(force=False)
            reopened = sum(1 for tile in self.store if not tile.forced)
            logger.info("Reopened all %d non-forced tiles to close an odd region", reopened)
            return reopened

        logger.info("Reopened %d inconsistent tiles", len(unsound))
        return len(unsound)

    def resolve_all(self) -> int:
        """
        Resolve every tile that needs it.

        Tiles that break a hard rule (left behind by a resize, say) are
        reopened first. The walk starts from a random seed; islands the seed
        cannot reach (cut off by forced tiles) are walked from the next
        unsettled tile in turn.

        Returns:
            Number of tiles resolved

        Raises:
            InvariantViolation: If the finished pass is not a valid tiling.
                The grid is restored to its state before the pass.
        """
        seed = self.pick_seed()
        backup = self.store.snapshot()
        settled: Set[Coord] = set()
        resolved = 0
        islands = 0

        try:
            self.clear_unsound()
            starts = [seed]
            starts.extend(coord for coord in self.store.coordinates() if coord != seed)
            for start in starts:
                if start in settled or not self._needs_resolution(start):
                    continue
                islands += 1
                for x, y in reversed(self.discover(start, settled)):
                    tile = self.store.tiles[x][y]
                    self.resolver.resolve(tile, self.store.neighbors_of(x, y))
                    resolved += 1

            if resolved:
                failures = [e for e in validate_store(self.store) if e.severity == "error"]
                if failures:
                    raise InvariantViolation(
                        f"{len(failures)} invariant failures after resolution, first: {failures[0]}"
                    )
        except InvariantViolation:
            self.store.restore(backup)
            logger.error("Resolution pass from seed %s aborted, grid restored", seed)
            raise

        logger.debug(
            "Resolved %d tiles in %d island(s) from seed %s", resolved, islands, seed
        )
        return resolved
