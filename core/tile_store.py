"""
TileStore - owner of the rectangular collection of hex tiles.

Tiles are indexed [x][y] (column, row) on an ODD-Q grid. The store handles
creation, resizing, resetting and forcing; the resolver and the propagation
driver mutate tile edges in place.
"""
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from core.config import TruchetConfig
from core.types import EdgeState, OutOfBoundsError, TileSnapshot
from utils.hex_parity import EDGE_COUNT, get_hex_neighbors_oddq

# Frozen copy of the grid: per column, per row, (edges, forced)
StoreSnapshot = Tuple[Tuple[Tuple[Tuple[EdgeState, ...], bool], ...], ...]


class Tile:
    """One hexagonal cell with six edges, numbered clockwise from north."""

    __slots__ = ("x", "y", "edges", "forced")

    def __init__(self, x: int, y: int, edges: Optional[Sequence[EdgeState]] = None):
        self.x = x
        self.y = y
        if edges is None:
            self.edges: List[EdgeState] = [EdgeState.UNDETERMINED] * EDGE_COUNT
        else:
            if len(edges) != EDGE_COUNT:
                raise ValueError(f"A tile has {EDGE_COUNT} edges, got {len(edges)}")
            self.edges = list(edges)
        self.forced = False

    def needs_resolution(self) -> bool:
        """True while any edge is still undetermined."""
        return EdgeState.UNDETERMINED in self.edges

    def crossing_edges(self) -> List[int]:
        """Indices of edges a line segment passes through."""
        return [i for i, state in enumerate(self.edges) if state == EdgeState.CROSSING]

    def clear(self) -> None:
        self.edges = [EdgeState.UNDETERMINED] * EDGE_COUNT

    def snapshot(self) -> TileSnapshot:
        return TileSnapshot(self.x, self.y, tuple(self.edges), self.forced)

    def __repr__(self):
        marks = "".join(
            {"undetermined": "?", "crossing": "1", "not_crossing": "0"}[e.value]
            for e in self.edges
        )
        forced = " forced" if self.forced else ""
        return f"Tile({self.x}, {self.y}, {marks}{forced})"


class TileStore:
    """
    Rectangular columns x rows collection of tiles.

    Attributes:
        columns: Number of columns
        rows: Number of rows
        config: Seam patterns used when the grid grows
    """

    def __init__(self, columns: int, rows: int, config: Optional[TruchetConfig] = None):
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive: {columns}x{rows}")

        self.config = config or TruchetConfig()
        self.columns: int = columns
        self.rows: int = rows
        self.tiles: List[List[Tile]] = [
            [Tile(x, y) for y in range(rows)] for x in range(columns)
        ]

    # =============================================================================
    # QUERIES
    # =============================================================================

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.columns and 0 <= y < self.rows

    def tile_at(self, x: int, y: int) -> Tile:
        """Live tile at (x, y); raises OutOfBoundsError outside the grid."""
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.columns, self.rows)
        return self.tiles[x][y]

    def coordinates(self) -> Iterator[Tuple[int, int]]:
        """All coordinates, column by column."""
        for x in range(self.columns):
            for y in range(self.rows):
                yield x, y

    def __iter__(self) -> Iterator[Tile]:
        for column in self.tiles:
            yield from column

    def neighbor_coordinates(self, x: int, y: int) -> List[Optional[Tuple[int, int]]]:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.columns, self.rows)
        return get_hex_neighbors_oddq(self.columns, self.rows, x, y)

    def neighbors_of(self, x: int, y: int) -> List[Optional[Tile]]:
        """Live neighbor tiles in edge order, None at the grid boundary."""
        return [
            None if coord is None else self.tiles[coord[0]][coord[1]]
            for coord in self.neighbor_coordinates(x, y)
        ]

    def get_statistics(self) -> Dict[str, int]:
        """Counts used by the status bar."""
        forced = 0
        undetermined = 0
        crossing_ends = 0
        for tile in self:
            if tile.forced:
                forced += 1
            if tile.needs_resolution():
                undetermined += 1
            crossing_ends += len(tile.crossing_edges())
        return {
            "total_tiles": self.columns * self.rows,
            "forced_tiles": forced,
            "undetermined_tiles": undetermined,
            # each crossing edge is counted once from each side
            "crossing_edges": crossing_ends // 2,
        }

    # =============================================================================
    # MUTATIONS
    # =============================================================================

    def reset(self, force: bool = False) -> None:
        """
        Return tiles to the undetermined state.

        Args:
            force: Also reset and un-force forced tiles
        """
        for tile in self:
            if force or not tile.forced:
                tile.clear()
            if force:
                tile.forced = False

    def toggle_force(self, x: int, y: int) -> bool:
        """
        Pin a tile to the empty configuration, or release it.

        Releasing leaves the edges as they are until the next reset.

        Returns:
            The new forced flag
        """
        tile = self.tile_at(x, y)
        if tile.forced:
            tile.forced = False
        else:
            tile.edges = [EdgeState.NOT_CROSSING] * EDGE_COUNT
            tile.forced = True
        return tile.forced

    def resize(self, columns: int, rows: int) -> None:
        """
        Grow or shrink the grid, keeping tiles inside both shapes untouched.

        On a resolved grid, new tiles in existing columns get the row seam
        pattern for their column parity and tiles in new columns get the
        column seam pattern. While any tile is still undetermined the new
        tiles start undetermined too, so the next resolution pass fills them
        with the rest.
        """
        if columns <= 0 or rows <= 0:
            raise ValueError(f"Grid dimensions must be positive: {columns}x{rows}")

        seeded = not any(tile.needs_resolution() for tile in self)

        del self.tiles[columns:]

        for x, column in enumerate(self.tiles):
            del column[rows:]
            seam = self.config.row_seam(x) if seeded else None
            for y in range(len(column), rows):
                column.append(Tile(x, y, seam))

        seam = self.config.column_seam if seeded else None
        for x in range(len(self.tiles), columns):
            self.tiles.append([Tile(x, y, seam) for y in range(rows)])

        self.columns = columns
        self.rows = rows

    # =============================================================================
    # SNAPSHOTS
    # =============================================================================

    def snapshot(self) -> StoreSnapshot:
        """Frozen copy of every tile's edges and forced flag."""
        return tuple(
            tuple((tuple(tile.edges), tile.forced) for tile in column)
            for column in self.tiles
        )

    def restore(self, snapshot: StoreSnapshot) -> None:
        """Replace the whole grid (shape included) with a snapshot."""
        if not snapshot or not snapshot[0]:
            raise ValueError("Cannot restore an empty snapshot")

        tiles: List[List[Tile]] = []
        for x, column in enumerate(snapshot):
            restored = []
            for y, (edges, forced) in enumerate(column):
                tile = Tile(x, y, edges)
                tile.forced = forced
                restored.append(tile)
            tiles.append(restored)

        self.tiles = tiles
        self.columns = len(snapshot)
        self.rows = len(snapshot[0])
