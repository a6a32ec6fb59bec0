"""
Data models for the league simulator.
Domain objects only; no persistence or API logic.

Teams are seeded once and never change during a season. Games are created in bulk
by the fixture generator; their scores are written later by the season runner or by
a manual correction. Standings and predictions are derived on every read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


# ---------- Team ----------
@dataclass(frozen=True)
class Team:
    """A competitor. strength is roughly 1-100, higher = stronger."""
    id: int
    name: str
    strength: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "strength": self.strength,
        }


# ---------- Game (fixture) ----------
@dataclass
class Game:
    """
    One fixture in the double round-robin. week is 1-based.
    Scores are None until the game is played (simulated or overridden).
    """
    id: int
    week: int
    home_team_id: int
    away_team_id: int
    home_score: int | None = None
    away_score: int | None = None

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None


# ---------- TeamWithGames ----------
@dataclass
class TeamWithGames:
    """A team together with every game it takes part in (home or away)."""
    team: Team
    games: list[Game] = field(default_factory=list)


# ---------- Standing (derived) ----------
@dataclass
class Standing:
    """One row of the league table. Never stored; recomputed from played games."""
    team_id: int
    team_name: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    points: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> dict[str, Any]:
        return {
            "team_id": self.team_id,
            "team_name": self.team_name,
            "played": self.played,
            "won": self.won,
            "drawn": self.drawn,
            "lost": self.lost,
            "for": self.goals_for,
            "against": self.goals_against,
            "gd": self.goal_difference,
            "points": self.points,
        }


# ---------- Prediction (derived) ----------
@dataclass(frozen=True)
class Prediction:
    """Relative title likelihood as a percentage (0-100, two decimals)."""
    team_id: int
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {"team_id": self.team_id, "probability": self.probability}
