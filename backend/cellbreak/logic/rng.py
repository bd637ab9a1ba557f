"""Random sources for the pacing engine."""
import secrets
from abc import ABC, abstractmethod


class RNGBase(ABC):
    """Abstract random source: a single uniform draw."""

    @abstractmethod
    def random(self) -> float:
        """Return random float in [0, 1)."""
        pass


class ProductionRNG(RNGBase):
    """
    Production RNG.

    Uses the OS entropy source, no fixed seed.
    """

    def random(self) -> float:
        return secrets.randbelow(2**32) / (2**32)


class SeededRNG(RNGBase):
    """
    Test/Simulation RNG.

    Deterministic, fully controlled by seed.
    """

    def __init__(self, seed: int):
        import random

        self._rng = random.Random(seed)
        self.seed = seed

    def random(self) -> float:
        return self._rng.random()
