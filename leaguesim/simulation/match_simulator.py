"""
Pure fixture simulation: no persistence, no team lookups.
Callable by the season runner for each unplayed game.
"""
from __future__ import annotations

from typing import Protocol

from leaguesim.errors import ValidationError

from .rng import SeededRNG

# Base goals are drawn uniformly from 0..MAX_BASE_GOALS, then scaled by strength / 100
MAX_BASE_GOALS = 5
AVERAGE_STRENGTH = 100


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


def _side_score(strength: int, rng: RandomSource) -> int:
    draw = rng.randint(0, MAX_BASE_GOALS)
    # floor(draw * strength / 100) without float rounding error
    return (draw * strength) // AVERAGE_STRENGTH


def simulate_score(
    strength_home: int,
    strength_away: int,
    rng: RandomSource | None = None,
) -> tuple[int, int]:
    """
    Return (home_score, away_score) for one fixture. Draws for the two sides are
    independent, so a stronger side has a higher ceiling but no guaranteed win.
    Strength 0 always scores 0.
    """
    if strength_home < 0 or strength_away < 0:
        raise ValidationError(
            f"Strengths must be non-negative (got {strength_home}, {strength_away})"
        )
    source = rng if rng is not None else SeededRNG()
    home = _side_score(strength_home, source)
    away = _side_score(strength_away, source)
    return home, away
