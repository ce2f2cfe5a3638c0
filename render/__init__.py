"""
Truchet Hex Tiler - Render Package
Tile geometry and image export. Tkinter drawing lives in render.hex_render.
"""
from .geometry import TruchetGeometry, pair_crossings
from .truchet_renderer_mpl import TruchetMplRenderer

__all__ = ['TruchetGeometry', 'pair_crossings', 'TruchetMplRenderer']
