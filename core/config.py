"""Tiler configuration: grid defaults, bounds and resize seam patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from core.types import EdgeState

_NO = EdgeState.NOT_CROSSING
_YES = EdgeState.CROSSING


@dataclass
class TruchetConfig:
    """Defaults for a new grid and the application controls."""

    # Initial grid shape
    columns: int = 10
    rows: int = 10

    # Display scale; drawing scale is scale / 200 of the unit tile
    scale: int = 100

    # Accepted grid dimensions in the controls
    min_dimension: int = 1
    max_dimension: int = 60

    # Undo/redo depth
    max_history: int = 100

    # Random seed; None draws from system entropy
    seed: Optional[int] = None

    # Console log level for setup_logging
    log_level: str = "WARNING"

    # Seam patterns given to tiles created by a resize. Cosmetic only:
    # they keep a grown grid from looking broken until the next refresh.
    row_seam_even: Tuple[EdgeState, ...] = (_NO, _NO, _YES, _NO, _YES, _NO)
    row_seam_odd: Tuple[EdgeState, ...] = (_NO, _YES, _NO, _NO, _NO, _YES)
    column_seam: Tuple[EdgeState, ...] = (_YES, _NO, _NO, _YES, _NO, _NO)

    def row_seam(self, x: int) -> Tuple[EdgeState, ...]:
        """Seam pattern for a new row tile in column x."""
        return self.row_seam_odd if x % 2 == 1 else self.row_seam_even
