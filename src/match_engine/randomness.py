"""Random number sources for the match engine.

Every random draw the engine makes goes through a :class:`RandomSource`
passed in by the caller, so tests can substitute a scripted source and
production code can seed a run for reproducibility.
"""

import random
from typing import Optional


class RandomSource:
    """Interface for the engine's randomness."""

    def random(self) -> float:
        """Return a float in ``[0, 1)``."""
        raise NotImplementedError

    def uniform(self, low: float, high: float) -> float:
        """Return a float in ``[low, high)``."""
        return low + (high - low) * self.random()


class SeededRandom(RandomSource):
    """RandomSource backed by :class:`random.Random`.

    A ``None`` seed draws from system entropy.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()
