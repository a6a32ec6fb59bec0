"""
League table aggregation. Pure functions over teams and their games; recomputed on
every read, never updated incrementally.
"""
from __future__ import annotations

from typing import Iterable

from leaguesim.models import Game, Standing, Team, TeamWithGames

POINTS_WIN = 3
POINTS_DRAW = 1


def team_standing(team: Team, games: Iterable[Game]) -> Standing:
    """
    Aggregate one team's row. A game counts for the team as soon as the team's own
    side has a score; the opponent's side is not checked.
    """
    row = Standing(team_id=team.id, team_name=team.name)
    for g in games:
        if g.home_team_id == team.id and g.home_score is not None:
            goals_for, goals_against = g.home_score, g.away_score or 0
        elif g.away_team_id == team.id and g.away_score is not None:
            goals_for, goals_against = g.away_score, g.home_score or 0
        else:
            continue
        row.played += 1
        row.goals_for += goals_for
        row.goals_against += goals_against
        if goals_for > goals_against:
            row.won += 1
            row.points += POINTS_WIN
        elif goals_for == goals_against:
            row.drawn += 1
            row.points += POINTS_DRAW
        else:
            row.lost += 1
    return row


def compute_standings(teams_with_games: Iterable[TeamWithGames]) -> list[Standing]:
    """
    One row per team, ranked by points then goal difference (both descending).
    Teams level on both keep their input order.
    """
    rows = [team_standing(t.team, t.games) for t in teams_with_games]
    return sorted(rows, key=lambda r: (-r.points, -r.goal_difference))
