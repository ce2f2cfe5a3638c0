"""
Command pattern implementation for undo/redo of tiling operations.
Each command records the grid before and after it ran, so undo restores the
old tiling and redo brings back the same result instead of new dice rolls.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.tile_store import StoreSnapshot

logger = logging.getLogger(__name__)


class Command(ABC):
    """Abstract base class for all reversible commands."""

    @abstractmethod
    def execute(self, grid) -> bool:
        """Execute the command. Returns True if successful."""
        pass

    @abstractmethod
    def undo(self, grid) -> bool:
        """Undo the command. Returns True if successful."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get human-readable description of the command."""
        pass


class SnapshotCommand(Command):
    """Base for commands that are undone by restoring a grid snapshot."""

    def __init__(self):
        self.before: Optional[StoreSnapshot] = None
        self.after: Optional[StoreSnapshot] = None

    @abstractmethod
    def apply(self, grid) -> None:
        """Perform the operation on the grid."""
        pass

    def execute(self, grid) -> bool:
        """Run the operation the first time, replay the result on redo."""
        if self.after is not None:
            grid.store.restore(self.after)
            return True

        self.before = grid.store.snapshot()
        self.apply(grid)
        self.after = grid.store.snapshot()
        return True

    def undo(self, grid) -> bool:
        """Restore the grid as it was before the command."""
        if self.before is None:
            return False

        grid.store.restore(self.before)
        return True


class ToggleForceCommand(SnapshotCommand):
    """Command to force or release a tile, then re-resolve the grid."""

    def __init__(self, x: int, y: int):
        super().__init__()
        self.x = x
        self.y = y
        self.forced: Optional[bool] = None

    def apply(self, grid) -> None:
        grid.toggle_force(self.x, self.y)
        self.forced = grid.store.tile_at(self.x, self.y).forced

    def get_description(self) -> str:
        action = "Force" if self.forced else "Release"
        return f"{action} tile ({self.x}, {self.y})"


class ResizeCommand(SnapshotCommand):
    """Command to change the grid shape."""

    def __init__(self, columns: int, rows: int):
        super().__init__()
        self.columns = columns
        self.rows = rows

    def apply(self, grid) -> None:
        grid.resize(self.columns, self.rows)

    def get_description(self) -> str:
        return f"Resize to {self.columns}x{self.rows}"


class RefreshCommand(SnapshotCommand):
    """Command to draw a fresh tiling around the forced tiles."""

    def apply(self, grid) -> None:
        grid.refresh()

    def get_description(self) -> str:
        return "Refresh tiling"


class RegenerateCommand(SnapshotCommand):
    """Command to release every tile and draw a fresh tiling."""

    def apply(self, grid) -> None:
        grid.regenerate()

    def get_description(self) -> str:
        return "Regenerate tiling"


class CommandHistory:
    """
    Undo and redo stacks of tiling commands.

    Executing a new command drops the redo stack. Only the newest
    max_history commands can be undone.
    """

    def __init__(self, max_history: int = 100):
        if max_history < 1:
            raise ValueError(f"max_history must be at least 1, got {max_history}")
        self.max_history = max_history
        self.done: List[Command] = []
        self.undone: List[Command] = []

    def execute_command(self, command: Command, grid) -> bool:
        """Run a command and push it onto the undo stack."""
        if not command.execute(grid):
            return False

        self.undone.clear()
        self.done.append(command)
        del self.done[:-self.max_history]
        logger.debug("Executed: %s", command.get_description())
        return True

    def can_undo(self) -> bool:
        return bool(self.done)

    def can_redo(self) -> bool:
        return bool(self.undone)

    def undo(self, grid) -> bool:
        """Undo the newest command; False when there is none."""
        if not self.done or not self.done[-1].undo(grid):
            return False

        command = self.done.pop()
        self.undone.append(command)
        logger.debug("Undid: %s", command.get_description())
        return True

    def redo(self, grid) -> bool:
        """Replay the last undone command; False when there is none."""
        if not self.undone or not self.undone[-1].execute(grid):
            return False

        command = self.undone.pop()
        self.done.append(command)
        logger.debug("Redid: %s", command.get_description())
        return True

    def get_undo_description(self) -> Optional[str]:
        return self.done[-1].get_description() if self.done else None

    def get_redo_description(self) -> Optional[str]:
        return self.undone[-1].get_description() if self.undone else None

    def clear_history(self) -> None:
        self.done.clear()
        self.undone.clear()

    def get_history_info(self) -> Dict[str, Any]:
        """Stack sizes and the next undo/redo descriptions, for the history panel."""
        return {
            "total_commands": len(self.done) + len(self.undone),
            "undo_depth": len(self.done),
            "redo_depth": len(self.undone),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
