import tkinter as tk
from tkinter import ttk
from typing import Dict, Optional, Tuple


class EnhancedStatusBar:
    """
    Status bar for the tiler.

    Zones, left to right: last action, grid summary, validation result, and
    the tile under the pointer.
    """

    def __init__(self, parent: tk.Widget):
        self.frame = ttk.Frame(parent)
        self.frame.pack(side=tk.BOTTOM, fill=tk.X)

        self.main_status = self._add_zone("Ready", anchor=tk.W, expand=True)
        self.tiling_var = self._add_zone("", anchor=tk.W, width=34)
        self.validation_var = self._add_zone("Unresolved", anchor=tk.CENTER, width=15)
        self.position_var = self._add_zone("", anchor=tk.E, width=12, separator=False)

    def _add_zone(self, text: str, anchor: str, width: Optional[int] = None,
                  expand: bool = False, separator: bool = True) -> tk.StringVar:
        var = tk.StringVar(value=text)
        label = ttk.Label(self.frame, textvariable=var, relief=tk.SUNKEN,
                          anchor=anchor, padding=3, width=width)
        label.pack(side=tk.LEFT, fill=tk.X, expand=expand)
        if separator:
            ttk.Separator(self.frame, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, padx=2)
        return var

    def update_main_status(self, status: str):
        self.main_status.set(status)

    def update_tiling(self, shape: Tuple[int, int], stats: Dict[str, int]):
        """Grid size plus forced, crossing and still-open tile counts."""
        parts = [
            f"{shape[0]}x{shape[1]}",
            f"forced {stats['forced_tiles']}",
            f"crossings {stats['crossing_edges']}",
        ]
        if stats["undetermined_tiles"]:
            parts.append(f"open {stats['undetermined_tiles']}")
        self.tiling_var.set(" | ".join(parts))

    def update_validation_status(self, errors: int, warnings: int):
        if errors:
            self.validation_var.set(f"❌ {errors} broken edges")
        elif warnings:
            self.validation_var.set(f"⚠️ {warnings} open tiles")
        else:
            self.validation_var.set("✅ Closed tiling")

    def update_position(self, x: Optional[int] = None, y: Optional[int] = None):
        """Show the tile under the pointer; no arguments clears the zone."""
        self.position_var.set("" if x is None or y is None else f"tile {x},{y}")
