import os
import sys
import pytest

# Add project root to sys.path (so tests can import core.*)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(PROJECT_ROOT)

from core.random_source import PythonRandomSource, RandomSource
from core.truchet_grid import TruchetGrid


class ScriptedRandomSource(RandomSource):
    """Replays a fixed list of answers, clamped to the requested limit."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.calls = []

    def random_int(self, limit: int) -> int:
        self.calls.append(limit)
        value = self.answers.pop(0) if self.answers else 0
        return min(value, limit - 1)


@pytest.fixture
def scripted_random():
    """Returns a factory for ScriptedRandomSource."""
    return ScriptedRandomSource


@pytest.fixture
def make_grid():
    """Returns a function that builds a seeded TruchetGrid, optionally resolved."""
    def _make(columns, rows, seed=0, resolve=True):
        grid = TruchetGrid(columns, rows, random_source=PythonRandomSource(seed))
        if resolve:
            grid.resolve_all()
        return grid
    return _make
