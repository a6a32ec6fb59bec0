"""
Seeded RNG for reproducible season simulations.
Inject one into the simulator (or pass a seed) to replay the same scores.
"""
from __future__ import annotations

import random


class SeededRNG:
    """Wrapper around random.Random; the only random source the simulator touches."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)
