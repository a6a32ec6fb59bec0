"""
Match simulation: seeded, replayable score generation for league fixtures.
"""
from .rng import SeededRNG
from .match_simulator import (
    AVERAGE_STRENGTH,
    MAX_BASE_GOALS,
    RandomSource,
    simulate_score,
)

__all__ = [
    "SeededRNG",
    "AVERAGE_STRENGTH",
    "MAX_BASE_GOALS",
    "RandomSource",
    "simulate_score",
]
