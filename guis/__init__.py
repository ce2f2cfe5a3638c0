# guis/__init__.py
"""
Truchet Hex Tiler - GUI Package
Tkinter interface components and canvas management.
"""
from .hex_canvas import TruchetCanvas
from .status_bar import EnhancedStatusBar

__all__ = ['TruchetCanvas', 'EnhancedStatusBar']
