"""
Title predictions from team strength, gated on season progress.
"""
from __future__ import annotations

from typing import Iterable

from leaguesim.errors import DomainError
from leaguesim.models import Prediction, Team

# Weeks that must be fully played before predictions are returned
DEFAULT_MIN_WEEK = 4


def compute_predictions(
    teams: Iterable[Team],
    max_played_week: int | None,
    min_week: int = DEFAULT_MIN_WEEK,
) -> list[Prediction]:
    """
    probability = strength / sum(strengths) * 100, rounded to 2 decimals.
    Returns [] until max_played_week reaches min_week (None counts as week 0).
    """
    if (max_played_week or 0) < min_week:
        return []
    teams = list(teams)
    total = sum(t.strength for t in teams)
    if total <= 0:
        raise DomainError("Cannot compute predictions: total team strength is zero")
    return [
        Prediction(team_id=t.id, probability=round(t.strength / total * 100, 2))
        for t in teams
    ]
