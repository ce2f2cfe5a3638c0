"""
Random sources for tie-breaking during edge resolution.
Injected into the resolver and driver so tilings can be reproduced.
"""
import random
from abc import ABC, abstractmethod
from typing import List, Optional


class RandomSource(ABC):
    """Abstract source of random integers."""

    @abstractmethod
    def random_int(self, limit: int) -> int:
        """Return an integer in [0, limit)."""
        pass

    def shuffle(self, items: List) -> None:
        """In-place Fisher-Yates shuffle driven by random_int."""
        for i in range(len(items) - 1, 0, -1):
            j = self.random_int(i + 1)
            if j != i:
                items[i], items[j] = items[j], items[i]


class PythonRandomSource(RandomSource):
    """RandomSource backed by random.Random."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random_int(self, limit: int) -> int:
        if limit <= 0:
            raise ValueError(f"limit must be positive: {limit}")
        return self._rng.randrange(limit)
