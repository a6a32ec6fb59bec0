"""
SQLite repositories for league data.
No business logic, only read/write operations.
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Any, Iterable

from leaguesim.models import Game, Team, TeamWithGames

_GAME_COLS = "id, week, home_team_id, away_team_id, home_score, away_score"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_team(r: sqlite3.Row) -> Team:
    return Team(id=r["id"], name=r["name"], strength=r["strength"])


def _row_to_game(r: sqlite3.Row) -> Game:
    return Game(
        id=r["id"],
        week=r["week"],
        home_team_id=r["home_team_id"],
        away_team_id=r["away_team_id"],
        home_score=r["home_score"],
        away_score=r["away_score"],
    )


def _fixture_rows(fixtures: Iterable[dict[str, Any]]) -> list[tuple]:
    now = _now_iso()
    return [(f["week"], f["home_team_id"], f["away_team_id"], now) for f in fixtures]


_INSERT_GAME = "INSERT INTO games (week, home_team_id, away_team_id, created_at) VALUES (?, ?, ?, ?)"


# ---------- TeamRepository ----------


class TeamRepository:
    """CRUD for teams. Teams are seeded once and never deleted."""

    def create(self, conn: sqlite3.Connection, name: str, strength: int = 50) -> Team:
        cur = conn.execute(
            "INSERT INTO teams (name, strength, created_at) VALUES (?, ?, ?)",
            (name, strength, _now_iso()),
        )
        conn.commit()
        return Team(id=cur.lastrowid, name=name, strength=strength)

    def get(self, conn: sqlite3.Connection, team_id: int) -> Team | None:
        row = conn.execute(
            "SELECT id, name, strength FROM teams WHERE id = ?", (team_id,)
        ).fetchone()
        return _row_to_team(row) if row is not None else None

    def list_ids(self, conn: sqlite3.Connection) -> list[int]:
        rows = conn.execute("SELECT id FROM teams ORDER BY id").fetchall()
        return [r["id"] for r in rows]

    def list_all(self, conn: sqlite3.Connection) -> list[Team]:
        rows = conn.execute("SELECT id, name, strength FROM teams ORDER BY id").fetchall()
        return [_row_to_team(r) for r in rows]

    def list_with_games(self, conn: sqlite3.Connection) -> list[TeamWithGames]:
        """Every team with its home and away games (played or not)."""
        teams = self.list_all(conn)
        by_team: dict[int, TeamWithGames] = {t.id: TeamWithGames(team=t) for t in teams}
        rows = conn.execute(f"SELECT {_GAME_COLS} FROM games ORDER BY week, id").fetchall()
        for r in rows:
            g = _row_to_game(r)
            for tid in (g.home_team_id, g.away_team_id):
                if tid in by_team:
                    by_team[tid].games.append(g)
        return [by_team[t.id] for t in teams]


# ---------- GameRepository ----------


class GameRepository:
    """CRUD for games (fixtures). No business logic."""

    def count(self, conn: sqlite3.Connection) -> int:
        (n,) = conn.execute("SELECT COUNT(*) FROM games").fetchone()
        return n

    def insert_many(self, conn: sqlite3.Connection, fixtures: list[dict[str, Any]]) -> None:
        """Bulk insert {week, home_team_id, away_team_id} records in one transaction."""
        conn.executemany(_INSERT_GAME, _fixture_rows(fixtures))
        conn.commit()

    def insert_many_if_empty(self, conn: sqlite3.Connection, fixtures: list[dict[str, Any]]) -> bool:
        """
        Insert fixtures only if the games table is empty. Count and insert run under
        one write lock (BEGIN IMMEDIATE), so concurrent bootstraps cannot both insert.
        Commits any transaction already open on conn before taking the lock.
        """
        if conn.in_transaction:
            conn.commit()
        conn.execute("BEGIN IMMEDIATE")
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM games").fetchone()
            if n > 0:
                conn.rollback()
                return False
            conn.executemany(_INSERT_GAME, _fixture_rows(fixtures))
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        return True

    def get(self, conn: sqlite3.Connection, game_id: int) -> Game | None:
        row = conn.execute(
            f"SELECT {_GAME_COLS} FROM games WHERE id = ?", (game_id,)
        ).fetchone()
        return _row_to_game(row) if row is not None else None

    def list_all(self, conn: sqlite3.Connection) -> list[Game]:
        rows = conn.execute(f"SELECT {_GAME_COLS} FROM games ORDER BY week, id").fetchall()
        return [_row_to_game(r) for r in rows]

    def list_by_week(self, conn: sqlite3.Connection, week: int) -> list[Game]:
        rows = conn.execute(
            f"SELECT {_GAME_COLS} FROM games WHERE week = ? ORDER BY id", (week,)
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def list_unplayed(self, conn: sqlite3.Connection) -> list[Game]:
        rows = conn.execute(
            f"SELECT {_GAME_COLS} FROM games WHERE home_score IS NULL OR away_score IS NULL ORDER BY week, id"
        ).fetchall()
        return [_row_to_game(r) for r in rows]

    def min_unplayed_week(self, conn: sqlite3.Connection) -> int | None:
        """Lowest week with a game whose home score is still NULL; None when all are played."""
        (week,) = conn.execute("SELECT MIN(week) FROM games WHERE home_score IS NULL").fetchone()
        return week

    def max_played_week(self, conn: sqlite3.Connection) -> int | None:
        (week,) = conn.execute("SELECT MAX(week) FROM games WHERE home_score IS NOT NULL").fetchone()
        return week

    def update_scores(
        self, conn: sqlite3.Connection, game_id: int, home_score: int, away_score: int
    ) -> None:
        conn.execute(
            "UPDATE games SET home_score = ?, away_score = ? WHERE id = ?",
            (home_score, away_score, game_id),
        )
        conn.commit()
