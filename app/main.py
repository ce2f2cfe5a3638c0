"""
Truchet Hex Tiler application.
Tkinter front end over the core grid: size and scale controls, click to
force tiles, regenerate, undo/redo and image export.
"""

import tkinter as tk
from tkinter import ttk, messagebox, filedialog
import sys
import os
from typing import Optional

# Add project root to path first
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Then import project modules
from core.config import TruchetConfig
from core.logging_config import setup_logging
from core.truchet_grid import TruchetGrid
from core.types import TruchetError
from guis.hex_canvas import TruchetCanvas
from guis.status_bar import EnhancedStatusBar
from render.truchet_renderer_mpl import TruchetMplRenderer


class TruchetApp:
    """Truchet Hex Tiler main window."""

    def __init__(self, config: Optional[TruchetConfig] = None):
        """Initialize the application."""
        self.config = config or TruchetConfig()

        self.root = tk.Tk()
        self.root.title("Truchet Hex Tiler")
        self.root.geometry("1200x850")

        # Application state
        self.grid: TruchetGrid = None

        # UI Components
        self.canvas: TruchetCanvas = None
        self.history_var = tk.StringVar()
        self.enhanced_status_bar = EnhancedStatusBar(self.root)

        # Undo/Redo button references
        self.undo_button = None
        self.redo_button = None

        self._create_ui()
        self._create_default_grid()

    def _create_ui(self):
        """Create the user interface."""
        main_frame = ttk.Frame(self.root)
        main_frame.pack(fill=tk.BOTH, expand=True, padx=5, pady=5)

        # Left panel for controls
        left_panel = ttk.Frame(main_frame, width=240)
        left_panel.pack(side=tk.LEFT, fill=tk.Y, padx=(0, 5))
        left_panel.pack_propagate(False)

        # Right panel for canvas
        right_panel = ttk.Frame(main_frame)
        right_panel.pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)

        self._create_control_panel(left_panel)
        self._create_canvas_area(right_panel)

    def _create_control_panel(self, parent):
        """Create the left control panel."""
        # Grid dimensions section
        dims_frame = ttk.LabelFrame(parent, text="Grid", padding=5)
        dims_frame.pack(fill=tk.X, pady=(0, 10))

        ttk.Label(dims_frame, text="Columns:").pack(anchor=tk.W)
        self.cols_var = tk.StringVar(value=str(self.config.columns))
        cols_entry = ttk.Entry(dims_frame, textvariable=self.cols_var, width=8)
        cols_entry.pack(anchor=tk.W, pady=(0, 5))
        cols_entry.bind("<Return>", lambda e: self._apply_size())

        ttk.Label(dims_frame, text="Rows:").pack(anchor=tk.W)
        self.rows_var = tk.StringVar(value=str(self.config.rows))
        rows_entry = ttk.Entry(dims_frame, textvariable=self.rows_var, width=8)
        rows_entry.pack(anchor=tk.W, pady=(0, 5))
        rows_entry.bind("<Return>", lambda e: self._apply_size())

        ttk.Button(dims_frame, text="Apply Size", command=self._apply_size).pack(fill=tk.X, pady=2)

        ttk.Label(dims_frame, text="Scale:").pack(anchor=tk.W)
        self.scale_var = tk.StringVar(value=str(self.config.scale))
        scale_entry = ttk.Entry(dims_frame, textvariable=self.scale_var, width=8)
        scale_entry.pack(anchor=tk.W, pady=(0, 5))
        scale_entry.bind("<Return>", lambda e: self._apply_scale())

        # Tiling section
        tiling_frame = ttk.LabelFrame(parent, text="Tiling", padding=5)
        tiling_frame.pack(fill=tk.X, pady=(0, 10))

        ttk.Button(tiling_frame, text="Refresh", command=self._refresh).pack(fill=tk.X, pady=2)
        ttk.Button(tiling_frame, text="Regenerate", command=self._regenerate).pack(fill=tk.X, pady=2)
        ttk.Button(tiling_frame, text="Export Image", command=self._export_image).pack(fill=tk.X, pady=2)

        # Undo/Redo section
        history_frame = ttk.LabelFrame(parent, text="Undo/Redo", padding=5)
        history_frame.pack(fill=tk.X, pady=(0, 10))

        button_frame = ttk.Frame(history_frame)
        button_frame.pack(fill=tk.X, pady=(0, 5))

        self.undo_button = ttk.Button(button_frame, text="↶ Undo", command=self._undo_action, width=10)
        self.undo_button.pack(side=tk.LEFT, padx=(0, 3))

        self.redo_button = ttk.Button(button_frame, text="↷ Redo", command=self._redo_action, width=10)
        self.redo_button.pack(side=tk.LEFT, padx=(0, 3))

        self.history_var.set("No operations")
        history_status = ttk.Label(history_frame, textvariable=self.history_var,
                                   relief=tk.SUNKEN, anchor=tk.W, padding=3, font=("Arial", 9))
        history_status.pack(fill=tk.X, pady=(5, 0))

        help_frame = ttk.LabelFrame(parent, text="Instructions", padding=5)
        help_frame.pack(fill=tk.X, pady=(0, 10))

        instructions = """TRUCHET HEX TILER

• Click a tile: force it empty / release it
• Apply Size: grow or shrink the grid
  (new tiles show a seam until refreshed)
• Refresh: new tiling, forced tiles kept
• Regenerate: new tiling, all tiles released
• Export Image: save as SVG or PNG"""

        text_widget = tk.Text(help_frame, wrap=tk.WORD, height=9, width=30, font=("Arial", 8))
        text_widget.insert(tk.END, instructions)
        text_widget.config(state=tk.DISABLED)
        text_widget.pack(fill=tk.BOTH, expand=True)

    def _create_canvas_area(self, parent):
        """Create the canvas area."""
        canvas_frame = ttk.Frame(parent)
        canvas_frame.pack(fill=tk.BOTH, expand=True)

        self.canvas = TruchetCanvas(canvas_frame, width=900, height=750, scale=self.config.scale)
        self.canvas.set_change_callback(self._on_grid_change)
        self.canvas.set_history_callback(self._update_history_status)
        self.canvas.set_position_callback(self.enhanced_status_bar.update_position)

    def _create_default_grid(self):
        """Create and resolve the initial grid."""
        self.grid = TruchetGrid(config=self.config)
        self.grid.resolve_all()
        self.canvas.set_grid(self.grid)
        self._on_grid_change()

    def _read_dimension(self, var: tk.StringVar, name: str) -> Optional[int]:
        try:
            value = int(var.get())
        except ValueError:
            messagebox.showerror("Invalid Input", f"Please enter a whole number of {name}.")
            return None
        if not (self.config.min_dimension <= value <= self.config.max_dimension):
            messagebox.showerror(
                "Invalid Dimensions",
                f"{name.capitalize()} must be between {self.config.min_dimension} "
                f"and {self.config.max_dimension}."
            )
            return None
        return value

    def _apply_size(self):
        """Resize the grid; the existing tiling is kept, not re-resolved."""
        cols = self._read_dimension(self.cols_var, "columns")
        rows = self._read_dimension(self.rows_var, "rows")
        if cols is None or rows is None:
            return

        if self.grid.cmd_resize(cols, rows):
            self.canvas.redraw_grid()
            self.enhanced_status_bar.update_main_status(f"Resized to {cols}x{rows}")
            self._on_grid_change()
            self._update_history_status()

    def _apply_scale(self):
        try:
            scale = int(self.scale_var.get())
        except ValueError:
            messagebox.showerror("Invalid Input", "Please enter a whole number scale.")
            return
        if scale <= 0:
            messagebox.showerror("Invalid Scale", "Scale must be positive.")
            return
        self.canvas.set_scale(scale)

    def _run_tiling_action(self, action, label: str):
        try:
            action()
        except TruchetError as e:
            messagebox.showerror("Tiling Error", f"{label} failed:\n{e}")
            return
        self.canvas.redraw_grid()
        self._on_grid_change()
        self._update_history_status()
        self.enhanced_status_bar.update_main_status(f"{label} done")

    def _refresh(self):
        self._run_tiling_action(self.grid.cmd_refresh, "Refresh")

    def _regenerate(self):
        self._run_tiling_action(self.grid.cmd_regenerate, "Regenerate")

    def _export_image(self):
        """Export the current tiling as an image."""
        path = filedialog.asksaveasfilename(
            title="Export Tiling",
            defaultextension=".svg",
            initialfile="truchet.svg",
            filetypes=[("SVG image", "*.svg"), ("PNG image", "*.png")],
        )
        if not path:
            return

        scale = self.canvas.geometry.scale
        try:
            TruchetMplRenderer(self.grid.random_source, scale=scale).save(self.grid, path)
        except (OSError, ValueError) as e:
            messagebox.showerror("Export Error", f"Could not export image:\n{e}")
            return
        self.enhanced_status_bar.update_main_status(f"Exported {os.path.basename(path)}")

    def _undo_action(self):
        """Handle undo action."""
        if self.canvas and self.canvas.undo():
            self._sync_size_controls()
        else:
            messagebox.showinfo("Undo", "Nothing to undo.")

    def _redo_action(self):
        """Handle redo action."""
        if self.canvas and self.canvas.redo():
            self._sync_size_controls()
        else:
            messagebox.showinfo("Redo", "Nothing to redo.")

    def _sync_size_controls(self):
        cols, rows = self.grid.get_grid_shape()
        self.cols_var.set(str(cols))
        self.rows_var.set(str(rows))

    def _on_grid_change(self):
        """Update status bar with current grid statistics and validation."""
        if self.grid is None:
            return

        self.enhanced_status_bar.update_tiling(self.grid.get_grid_shape(), self.grid.get_statistics())

        findings = self.grid.validate_tiling()
        errors = [e for e in findings if e.severity == "error"]
        warnings = [e for e in findings if e.severity == "warning"]
        self.enhanced_status_bar.update_validation_status(len(errors), len(warnings))

    def _update_history_status(self):
        """Update undo/redo status display."""
        if self.grid is None:
            self.history_var.set("No grid")
            self.undo_button.config(state="disabled")
            self.redo_button.config(state="disabled")
            return

        can_undo = self.grid.can_undo()
        can_redo = self.grid.can_redo()
        self.undo_button.config(state="normal" if can_undo else "disabled")
        self.redo_button.config(state="normal" if can_redo else "disabled")

        history_info = self.grid.get_history_info()
        undo_desc = history_info["undo_description"]
        redo_desc = history_info["redo_description"]

        parts = []
        if can_undo and undo_desc:
            short_desc = undo_desc[:22] + "..." if len(undo_desc) > 25 else undo_desc
            parts.append(f"Undo: {short_desc}")
        if can_redo and redo_desc:
            short_desc = redo_desc[:22] + "..." if len(redo_desc) > 25 else redo_desc
            parts.append(f"Redo: {short_desc}")
        if not parts:
            parts.append(f"Operations: {history_info['total_commands']}")

        self.history_var.set(" | ".join(parts))

    def run(self):
        """Start the application."""
        self.root.mainloop()


def main():
    """Main entry point."""
    config = TruchetConfig()
    setup_logging(config.log_level)
    try:
        app = TruchetApp(config)
        app.run()
    except Exception as e:
        print(f"Error starting application: {e}")
        import traceback
        traceback.print_exc()


if __name__ == "__main__":
    main()
