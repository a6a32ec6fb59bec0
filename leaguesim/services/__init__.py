"""
Service layer: scheduling, standings, predictions and the season runner.
Pure computations live in scheduling / standings / predictions; league_service
orchestrates persistence.
"""
from .scheduling import BYE, generate_league_schedule, round_robin_pairings, total_weeks
from .standings import compute_standings, team_standing
from .predictions import DEFAULT_MIN_WEEK, compute_predictions
from .league_service import LeagueService

__all__ = [
    "BYE",
    "generate_league_schedule",
    "round_robin_pairings",
    "total_weeks",
    "compute_standings",
    "team_standing",
    "DEFAULT_MIN_WEEK",
    "compute_predictions",
    "LeagueService",
]
