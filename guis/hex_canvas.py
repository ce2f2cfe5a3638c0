"""
Interactive Truchet canvas with undo/redo support.
Left click forces or releases a tile through the command system.
"""
import logging
import tkinter as tk
from tkinter import messagebox
from typing import Callable, Optional

from core.truchet_grid import TruchetGrid
from core.random_source import PythonRandomSource, RandomSource
from core.types import TruchetError
from render.geometry import TruchetGeometry
from render.hex_render import TruchetRenderer

logger = logging.getLogger(__name__)


class TruchetCanvas:
    """Interactive canvas for viewing and forcing Truchet tiles."""

    def __init__(self, parent: tk.Widget, width: int = 800, height: int = 600,
                 scale: float = 100.0, rng: Optional[RandomSource] = None):
        """Initialize the Truchet canvas."""
        self.canvas = tk.Canvas(parent, width=width, height=height, bg="lightgray",
                                highlightthickness=0)
        self.canvas.pack(fill=tk.BOTH, expand=True)

        # Grid and rendering
        self.grid: Optional[TruchetGrid] = None
        self.geometry = TruchetGeometry(scale)
        self.renderer = TruchetRenderer(self.geometry, rng or PythonRandomSource())

        # Callbacks
        self.on_grid_change: Optional[Callable] = None
        self.on_history_change: Optional[Callable] = None
        self.position_callback: Optional[Callable] = None

        self._setup_event_bindings()

    def _setup_event_bindings(self):
        """Set up mouse event handlers."""
        self.canvas.bind("<Button-1>", self._on_left_click)
        self.canvas.bind("<Motion>", self._on_mouse_motion)
        self.canvas.bind("<Leave>", self._on_mouse_leave)

    def set_grid(self, grid: TruchetGrid):
        """Set the grid to display and interact with."""
        self.grid = grid
        self.redraw_grid()
        self._notify_history_change()

    def set_scale(self, scale: float):
        """Change the display scale and redraw."""
        self.geometry.scale = scale
        self.redraw_grid()

    def set_change_callback(self, callback: Callable):
        """Set callback function to be called when grid changes."""
        self.on_grid_change = callback

    def set_history_callback(self, callback: Callable):
        """Set callback function to be called when undo/redo state changes."""
        self.on_history_change = callback

    def set_position_callback(self, callback: Callable):
        """Set position update callback for status bar."""
        self.position_callback = callback

    def _notify_grid_change(self):
        """Notify about grid changes."""
        if self.on_grid_change:
            self.on_grid_change()
        self._notify_history_change()

    def _notify_history_change(self):
        """Notify about undo/redo state changes."""
        if self.on_history_change:
            self.on_history_change()

    def _tile_at_event(self, event):
        if self.grid is None:
            return None
        columns, rows = self.grid.get_grid_shape()
        return self.geometry.pixel_to_tile(
            self.canvas.canvasx(event.x), self.canvas.canvasy(event.y), columns, rows
        )

    def _on_left_click(self, event):
        """Force or release the clicked tile."""
        coord = self._tile_at_event(event)
        if coord is None:
            logger.debug("Click at (%d, %d) did not resolve to a tile", event.x, event.y)
            return

        try:
            self.grid.cmd_toggle_force(*coord)
        except TruchetError as e:
            # The grid keeps its last valid tiling
            messagebox.showerror("Tiling Error", f"Could not re-resolve the tiling:\n{e}")
            return

        self._notify_grid_change()
        self.redraw_grid()

    def _on_mouse_motion(self, event):
        """Track the tile under the mouse for the status bar."""
        if not self.position_callback:
            return
        coord = self._tile_at_event(event)
        if coord is None:
            self.position_callback()
        else:
            self.position_callback(*coord)

    def _on_mouse_leave(self, event):
        if self.position_callback:
            self.position_callback()

    # Undo/Redo methods

    def undo(self) -> bool:
        """Undo the last operation."""
        if not self.grid:
            return False

        success = self.grid.undo()
        if success:
            self._notify_grid_change()
            self.redraw_grid()
        return success

    def redo(self) -> bool:
        """Redo the next operation."""
        if not self.grid:
            return False

        success = self.grid.redo()
        if success:
            self._notify_grid_change()
            self.redraw_grid()
        return success

    def redraw_grid(self):
        """Completely redraw the grid on the canvas."""
        if self.grid is None:
            return

        self.canvas.delete("all")
        for tile in self.grid.tiles():
            self.renderer.draw_tile(self.canvas, tile)

        width, height = self.geometry.canvas_size(*self.grid.get_grid_shape())
        self.canvas.configure(scrollregion=(0, 0, width, height))
