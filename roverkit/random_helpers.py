"""Seeded random number sources for the localization filter."""

from __future__ import annotations

import random

RANDOM_SEED = 100


class UniformRandomGenerator:
    """Draws samples uniformly from [0, 1)."""

    def __init__(self, seed: int = RANDOM_SEED) -> None:
        self._rng = random.Random(seed)

    def sample(self) -> float:
        return self._rng.random()


class GaussianRandomGenerator:
    """Draws samples from the standard normal distribution."""

    def __init__(self, seed: int = RANDOM_SEED) -> None:
        self._rng = random.Random(seed)

    def sample(self) -> float:
        return self._rng.gauss(0.0, 1.0)