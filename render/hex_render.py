"""
Hexagonal rendering utilities for Truchet tiles on a Tkinter Canvas.
"""
from typing import List, Sequence

import tkinter as tk

from core.random_source import RandomSource
from core.types import TileSnapshot
from render.geometry import LINE_WIDTH, Point, TruchetGeometry, pair_crossings


class TruchetRenderer:
    """Draws Truchet tiles on a Tkinter Canvas."""

    BACKGROUND = "#f4efe6"
    FORCED_BACKGROUND = "#c9c2b6"
    OUTLINE = "#1f2a44"
    LINE = "#e8a33d"

    def __init__(self, geometry: TruchetGeometry, rng: RandomSource):
        self.geometry = geometry
        self.rng = rng

    def _place(self, x: int, y: int, points: Sequence[Point]) -> List[float]:
        """Tile-local unit points to flat canvas coordinates."""
        cx, cy = self.geometry.tile_center(x, y)
        f = self.geometry.factor
        flat = []
        for px, py in points:
            flat.extend([(cx + px) * f, (cy + py) * f])
        return flat

    def draw_tile(self, canvas: tk.Canvas, tile: TileSnapshot) -> List[int]:
        """
        Draw background, paired paths and caps of one tile.

        Returns:
            Canvas item IDs
        """
        g = self.geometry
        f = g.factor
        items = []

        fill = self.FORCED_BACKGROUND if tile.forced else self.BACKGROUND
        items.append(canvas.create_polygon(
            self._place(tile.x, tile.y, g.hex_points()),
            fill=fill, outline="", tags=("truchet_tile",)
        ))

        pairs, leftovers = pair_crossings(tile, self.rng)
        for ia, ib in pairs:
            items.append(canvas.create_line(
                self._place(tile.x, tile.y, g.truchet_path(ia, ib, 0)),
                fill=self.OUTLINE, width=(LINE_WIDTH + 8) * f,
                capstyle=tk.BUTT, joinstyle=tk.ROUND
            ))
            items.append(canvas.create_line(
                self._place(tile.x, tile.y, g.truchet_path(ia, ib, 1)),
                fill=self.LINE, width=LINE_WIDTH * f,
                capstyle=tk.BUTT, joinstyle=tk.ROUND
            ))
        for edge in leftovers:
            items.append(canvas.create_polygon(
                self._place(tile.x, tile.y, g.cap_points(edge)),
                fill=self.LINE, outline=self.OUTLINE
            ))

        return items
