"""
Truchet Hex Tiler - Core Package
Tile store, edge resolution, propagation and command system.
"""
from .truchet_grid import TruchetGrid
from .types import EdgeState, TileSnapshot, ValidationError, TruchetError, OutOfBoundsError, InvariantViolation
from .config import TruchetConfig
from .random_source import RandomSource, PythonRandomSource
from .commands import Command, CommandHistory

__all__ = [
    'TruchetGrid', 'EdgeState', 'TileSnapshot', 'ValidationError', 'TruchetError',
    'OutOfBoundsError', 'InvariantViolation', 'TruchetConfig', 'RandomSource',
    'PythonRandomSource', 'Command', 'CommandHistory',
]
