"""
Capability interfaces the league core depends on.
SQLite repositories and the in-memory fakes both satisfy them.
"""
from __future__ import annotations

from typing import Any, Protocol

from leaguesim.models import Game, Team, TeamWithGames


class TeamStore(Protocol):
    def get(self, conn: Any, team_id: int) -> Team | None: ...

    def list_ids(self, conn: Any) -> list[int]: ...

    def list_all(self, conn: Any) -> list[Team]: ...

    def list_with_games(self, conn: Any) -> list[TeamWithGames]: ...


class GameStore(Protocol):
    def count(self, conn: Any) -> int: ...

    def insert_many(self, conn: Any, fixtures: list[dict[str, Any]]) -> None: ...

    def insert_many_if_empty(self, conn: Any, fixtures: list[dict[str, Any]]) -> bool: ...

    def get(self, conn: Any, game_id: int) -> Game | None: ...

    def list_all(self, conn: Any) -> list[Game]: ...

    def list_by_week(self, conn: Any, week: int) -> list[Game]: ...

    def list_unplayed(self, conn: Any) -> list[Game]: ...

    def min_unplayed_week(self, conn: Any) -> int | None: ...

    def max_played_week(self, conn: Any) -> int | None: ...

    def update_scores(self, conn: Any, game_id: int, home_score: int, away_score: int) -> None: ...
