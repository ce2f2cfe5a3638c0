"""
Shared types for the Truchet hex tiler.
Separated to avoid circular imports between modules.
"""
from enum import Enum
from typing import NamedTuple, Optional, Tuple


class EdgeState(Enum):
    """Crossing decision held by one edge of a tile."""
    UNDETERMINED = "undetermined"   # Not decided yet
    CROSSING = "crossing"           # A line segment passes through the edge
    NOT_CROSSING = "not_crossing"   # Edge stays closed


class TileSnapshot(NamedTuple):
    """Read-only view of a tile handed out to renderers."""
    x: int
    y: int
    edges: Tuple[EdgeState, ...]
    forced: bool


class TruchetError(Exception):
    """Base class for tiling errors."""


class OutOfBoundsError(TruchetError, IndexError):
    """Raised when a coordinate falls outside the current grid."""

    def __init__(self, x: int, y: int, columns: int, rows: int):
        super().__init__(f"tile ({x}, {y}) outside grid {columns}x{rows}")
        self.x = x
        self.y = y


class InvariantViolation(TruchetError):
    """Raised when a resolution pass breaks parity or shared-edge agreement."""


class ValidationError:
    """Represents a validation finding with severity and description."""
    def __init__(self, severity: str, message: str, location: Optional[Tuple[int, int]] = None):
        self.severity = severity  # "error", "warning", "info"
        self.message = message
        self.location = location

    def __str__(self):
        loc_str = f" at {self.location}" if self.location else ""
        return f"{self.severity.upper()}: {self.message}{loc_str}"
