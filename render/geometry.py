"""
Flat-top ODD-Q geometry for Truchet tiles.
Geometry works in unit-tile space (hex radius 100) and is scaled on output.
"""
import logging
import math
from typing import List, Optional, Tuple

from core.random_source import RandomSource
from core.types import EdgeState, TileSnapshot

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

SQ3 = math.sqrt(3)
HEX_RADIUS = 100.0
# Distance from tile center to the middle of an edge
SIDE_DISTANCE = math.sin(math.pi / 3) * HEX_RADIUS
# Inner bend distance by number of edges skipped between the two ends
INNER_DISTANCE = (0.0, 50 / math.sin(math.pi / 3), 0.0)
LINE_WIDTH = 40.0


class TruchetGeometry:
    """Flat-top ODD-Q layout and Truchet path calculations."""

    def __init__(self, scale: float = 100.0):
        """
        Args:
            scale: Display scale; a unit tile is drawn at scale / 200
        """
        self.scale = scale

    @property
    def factor(self) -> float:
        return self.scale / 200.0

    # ---- layout (unit space) ------------------------------------------------

    def tile_center(self, x: int, y: int) -> Point:
        """Center of tile (x, y); odd columns sit half a row lower."""
        cx = x * 150 + 100
        cy = SQ3 / 2 * (y * 2 + 1) * HEX_RADIUS
        if x % 2 == 1:
            cy += SQ3 / 2 * HEX_RADIUS
        return cx, cy

    def tile_to_pixel(self, x: int, y: int) -> Point:
        cx, cy = self.tile_center(x, y)
        return cx * self.factor, cy * self.factor

    def pixel_to_tile(self, px: float, py: float, columns: int, rows: int) -> Optional[Tuple[int, int]]:
        """
        Tile whose hexagon contains the pixel, or None when outside the grid.
        Used for mouse click detection.
        """
        ux = px / self.factor
        uy = py / self.factor
        approx_x = round((ux - 100) / 150)

        best = None
        best_dist = None
        for x in range(approx_x - 1, approx_x + 2):
            if not 0 <= x < columns:
                continue
            offset = SQ3 / 2 * HEX_RADIUS if x % 2 == 1 else 0.0
            approx_y = round((uy - offset) / (SQ3 * HEX_RADIUS) - 0.5)
            for y in range(approx_y - 1, approx_y + 2):
                if not 0 <= y < rows:
                    continue
                cx, cy = self.tile_center(x, y)
                dist = math.hypot(ux - cx, uy - cy)
                if best_dist is None or dist < best_dist:
                    best, best_dist = (x, y), dist

        # Inscribed circle test is close enough at the hexagon corners
        if best is None or best_dist > HEX_RADIUS:
            return None
        return best

    def canvas_size(self, columns: int, rows: int) -> Tuple[float, float]:
        """Drawing size in pixels that holds every hexagon of the grid."""
        right = self.tile_center(columns - 1, 0)[0] + HEX_RADIUS
        # The lowest tile sits in an odd column whenever there is one
        bottom = max(self.tile_center(x, rows - 1)[1] for x in range(min(columns, 2)))
        return right * self.factor, (bottom + SIDE_DISTANCE) * self.factor

    # ---- tile-local shapes (unit space, origin at tile center) --------------

    def hex_points(self) -> List[Point]:
        """Six corners of a flat-top hexagon."""
        points = []
        for k in range(6):
            r = math.pi / 6 + k * math.pi / 3
            points.append((math.sin(r) * HEX_RADIUS, math.cos(r) * HEX_RADIUS))
        return points

    @staticmethod
    def edge_direction(edge: int, distance: float) -> Point:
        """Point at `distance` from center toward the middle of an edge."""
        return (
            math.sin(math.pi * edge / 3) * distance,
            math.cos(math.pi * (edge + 3) / 3) * distance,
        )

    def edge_midpoint(self, edge: int) -> Point:
        return self.edge_direction(edge, SIDE_DISTANCE)

    def truchet_path(self, ia: int, ib: int, overlap: float = 0.0) -> List[Point]:
        """
        Polyline joining two crossing edges.

        Opposite edges get a straight line, neighboring edges bend at
        INNER_DISTANCE, edges two apart bend through the center.
        """
        skips = abs(ib - ia)
        if skips > 3:
            skips = 6 - skips

        points = [self.edge_direction(ia, SIDE_DISTANCE + overlap)]
        if skips < 3:
            points.append(self.edge_direction(ia, INNER_DISTANCE[skips]))
            points.append(self.edge_direction(ib, INNER_DISTANCE[skips]))
        points.append(self.edge_direction(ib, SIDE_DISTANCE + overlap))
        return points

    def cap_points(self, edge: int) -> List[Point]:
        """Arrow-shaped stub for a crossing edge left without a partner."""
        tip_y = -30 / math.cos(math.pi / 6)
        shoulder = tip_y - LINE_WIDTH / 2 / math.tan(math.pi / 3)
        base = [
            (LINE_WIDTH / 2, -SIDE_DISTANCE),
            (LINE_WIDTH / 2, shoulder),
            (0.0, tip_y),
            (-LINE_WIDTH / 2, shoulder),
            (-LINE_WIDTH / 2, -SIDE_DISTANCE),
        ]
        angle = math.radians(60 * edge)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        return [(px * cos_a - py * sin_a, px * sin_a + py * cos_a) for px, py in base]


def pair_crossings(tile: TileSnapshot, rng: RandomSource) -> Tuple[List[Tuple[int, int]], List[int]]:
    """
    Shuffle a tile's crossing edges and pair them up in order.

    Returns:
        (pairs, leftovers); leftovers is non-empty only for an odd count
    """
    crossings = [i for i, state in enumerate(tile.edges) if state == EdgeState.CROSSING]
    rng.shuffle(crossings)

    pairs = [(crossings[i], crossings[i + 1]) for i in range(0, len(crossings) - 1, 2)]
    leftovers = crossings[len(pairs) * 2:]
    if leftovers:
        logger.warning(
            "odd number (%d) of links in tile %d,%d", len(crossings), tile.x, tile.y
        )
    return pairs, leftovers
