"""
TruchetGrid - owned context object for a hex Truchet tiling.

This module is the public face of the core: renderers and input handlers
read tiles and shape through it and mutate the grid only through its
operations. Integrates with the command pattern for undo/redo.
"""
import logging
from typing import Dict, List, Optional, Tuple

from core.commands import (
    CommandHistory,
    RefreshCommand,
    RegenerateCommand,
    ResizeCommand,
    ToggleForceCommand,
)
from core.config import TruchetConfig
from core.propagation import PropagationDriver
from core.random_source import PythonRandomSource, RandomSource
from core.tile_store import TileStore
from core.types import InvariantViolation, TileSnapshot, ValidationError
from core.validation import validate_store

logger = logging.getLogger(__name__)


class TruchetGrid:
    """
    Grid state manager for hex Truchet tilings.

    Responsibilities:
        - Own the tile store and the random source
        - Resolve the tiling through the propagation driver
        - Expose read-only tile snapshots to the render adapter
        - Integrate with command system for undo/redo

    Attributes:
        config: Defaults and seam patterns
        store: The tiles, indexed [x][y]
        random_source: Source for seed choice and tie-breaks
        driver: Propagation driver over the store
        command_history: Undo/redo command stack
    """

    def __init__(
        self,
        columns: Optional[int] = None,
        rows: Optional[int] = None,
        random_source: Optional[RandomSource] = None,
        config: Optional[TruchetConfig] = None,
    ):
        """
        Initialize an unresolved grid.

        Args:
            columns: Column count (defaults to config.columns)
            rows: Row count (defaults to config.rows)
            random_source: Injected randomness (defaults to a seeded PythonRandomSource)
            config: Tiler configuration
        """
        self.config = config or TruchetConfig()
        self.store = TileStore(
            columns if columns is not None else self.config.columns,
            rows if rows is not None else self.config.rows,
            self.config,
        )
        self.random_source = random_source or PythonRandomSource(self.config.seed)
        self.driver = PropagationDriver(self.store, self.random_source)
        self.command_history = CommandHistory(max_history=self.config.max_history)

    # =============================================================================
    # QUERIES
    # =============================================================================

    def get_tile(self, x: int, y: int) -> TileSnapshot:
        """Read-only snapshot of the tile at (x, y)."""
        return self.store.tile_at(x, y).snapshot()

    def get_grid_shape(self) -> Tuple[int, int]:
        """(columns, rows)"""
        return self.store.columns, self.store.rows

    def get_neighbor_coordinates(self, x: int, y: int) -> List[Optional[Tuple[int, int]]]:
        """Neighbor coordinates in edge order, for layout purposes."""
        return self.store.neighbor_coordinates(x, y)

    def tiles(self) -> List[TileSnapshot]:
        """Snapshots of every tile, column by column."""
        return [tile.snapshot() for tile in self.store]

    def is_resolved(self) -> bool:
        return not any(tile.needs_resolution() for tile in self.store)

    def get_statistics(self) -> Dict[str, int]:
        return self.store.get_statistics()

    def validate_tiling(self) -> List[ValidationError]:
        """Return a list[ValidationError]; no "error" entries means a valid tiling."""
        return validate_store(self.store)

    # =============================================================================
    # DIRECT MUTATIONS (used by commands)
    # =============================================================================

    def resolve_all(self) -> None:
        """Resolve every undetermined tile."""
        self.driver.resolve_all()

    def reset(self, force: bool = False) -> None:
        """Clear non-forced tiles; with force, clear and release every tile."""
        self.store.reset(force)

    def resize(self, columns: int, rows: int) -> None:
        """Change the grid shape without resolving; see TileStore.resize for new tiles."""
        self.store.resize(columns, rows)
        logger.debug("Resized grid to %dx%d", columns, rows)

    def toggle_force(self, x: int, y: int) -> None:
        """Force or release a tile, then redraw the tiling around it."""
        before = self.store.snapshot()
        self.store.toggle_force(x, y)
        self._refresh_or_rollback(before)

    def refresh(self) -> None:
        """New tiling that keeps forced tiles."""
        self._refresh_or_rollback(self.store.snapshot())

    def regenerate(self) -> None:
        """New tiling with every tile released."""
        before = self.store.snapshot()
        self.store.reset(force=True)
        self._refresh_or_rollback(before)

    def _refresh_or_rollback(self, before) -> None:
        """Reset non-forced tiles and resolve; on failure put `before` back."""
        self.store.reset(force=False)
        try:
            self.driver.resolve_all()
        except InvariantViolation:
            self.store.restore(before)
            raise

    # =============================================================================
    # COMMAND-BASED MUTATIONS (use these for user operations with undo/redo)
    # =============================================================================

    def cmd_toggle_force(self, x: int, y: int) -> bool:
        """Toggle force using command system (for undo/redo)."""
        command = ToggleForceCommand(x, y)
        return self.command_history.execute_command(command, self)

    def cmd_resize(self, columns: int, rows: int) -> bool:
        """Resize using command system (for undo/redo)."""
        if (columns, rows) == self.get_grid_shape():
            return False
        command = ResizeCommand(columns, rows)
        return self.command_history.execute_command(command, self)

    def cmd_refresh(self) -> bool:
        """Refresh using command system (for undo/redo)."""
        command = RefreshCommand()
        return self.command_history.execute_command(command, self)

    def cmd_regenerate(self) -> bool:
        """Regenerate using command system (for undo/redo)."""
        command = RegenerateCommand()
        return self.command_history.execute_command(command, self)

    # =============================================================================
    # UNDO/REDO OPERATIONS
    # =============================================================================

    def undo(self) -> bool:
        """Undo the last operation."""
        return self.command_history.undo(self)

    def redo(self) -> bool:
        """Redo the next operation."""
        return self.command_history.redo(self)

    def can_undo(self) -> bool:
        """Check if undo is available."""
        return self.command_history.can_undo()

    def can_redo(self) -> bool:
        """Check if redo is available."""
        return self.command_history.can_redo()

    def get_undo_description(self) -> Optional[str]:
        """Get description of operation that would be undone."""
        return self.command_history.get_undo_description()

    def get_redo_description(self) -> Optional[str]:
        """Get description of operation that would be redone."""
        return self.command_history.get_redo_description()

    def clear_history(self) -> None:
        """Clear undo/redo history."""
        self.command_history.clear_history()

    def get_history_info(self) -> Dict:
        """Get detailed history information."""
        return self.command_history.get_history_info()
