"""
In-memory stores for tests and quick experiments.
Same method shapes as the SQLite repositories; the conn argument is accepted and ignored.
"""
from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any

from leaguesim.models import Game, Team, TeamWithGames


class InMemoryTeamStore:
    def __init__(self, teams: list[Team] | None = None, games: "InMemoryGameStore | None" = None) -> None:
        self._teams: dict[int, Team] = {}
        self._games = games
        for t in teams or []:
            self._teams[t.id] = t

    def get(self, conn: Any, team_id: int) -> Team | None:
        return self._teams.get(team_id)

    def list_ids(self, conn: Any) -> list[int]:
        return sorted(self._teams)

    def list_all(self, conn: Any) -> list[Team]:
        return [self._teams[tid] for tid in sorted(self._teams)]

    def list_with_games(self, conn: Any) -> list[TeamWithGames]:
        games = self._games.list_all(conn) if self._games is not None else []
        return [
            TeamWithGames(
                team=t,
                games=[g for g in games if t.id in (g.home_team_id, g.away_team_id)],
            )
            for t in self.list_all(conn)
        ]


class InMemoryGameStore:
    def __init__(self) -> None:
        self._games: dict[int, Game] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _insert(self, fixtures: list[dict[str, Any]]) -> None:
        for f in fixtures:
            gid = self._next_id
            self._next_id += 1
            self._games[gid] = Game(
                id=gid,
                week=f["week"],
                home_team_id=f["home_team_id"],
                away_team_id=f["away_team_id"],
            )

    def _sorted(self, games) -> list[Game]:
        return [replace(g) for g in sorted(games, key=lambda g: (g.week, g.id))]

    def count(self, conn: Any) -> int:
        return len(self._games)

    def insert_many(self, conn: Any, fixtures: list[dict[str, Any]]) -> None:
        with self._lock:
            self._insert(fixtures)

    def insert_many_if_empty(self, conn: Any, fixtures: list[dict[str, Any]]) -> bool:
        with self._lock:
            if self._games:
                return False
            self._insert(fixtures)
            return True

    def get(self, conn: Any, game_id: int) -> Game | None:
        g = self._games.get(game_id)
        return replace(g) if g is not None else None

    def list_all(self, conn: Any) -> list[Game]:
        return self._sorted(self._games.values())

    def list_by_week(self, conn: Any, week: int) -> list[Game]:
        return self._sorted(g for g in self._games.values() if g.week == week)

    def list_unplayed(self, conn: Any) -> list[Game]:
        return self._sorted(g for g in self._games.values() if not g.is_played)

    def min_unplayed_week(self, conn: Any) -> int | None:
        weeks = [g.week for g in self._games.values() if g.home_score is None]
        return min(weeks) if weeks else None

    def max_played_week(self, conn: Any) -> int | None:
        weeks = [g.week for g in self._games.values() if g.home_score is not None]
        return max(weeks) if weeks else None

    def update_scores(self, conn: Any, game_id: int, home_score: int, away_score: int) -> None:
        g = self._games[game_id]
        g.home_score = home_score
        g.away_score = away_score
