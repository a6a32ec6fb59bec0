"""
Database connection and initialization.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from leaguesim.config import get_settings

from .repositories import TeamRepository
from .schema import all_schema_sql

logger = logging.getLogger(__name__)

_db_path: Path | None = None


def set_db_path(path: str | Path) -> None:
    """Set the database path. Call before first get_connection if not using default."""
    global _db_path
    _db_path = Path(path)


def get_db_path() -> Path:
    """Return the current database path (explicit override, else LEAGUE_DB_PATH / default)."""
    if _db_path is not None:
        return _db_path
    return get_settings().db_path


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    """
    Return a new SQLite connection.
    Use as context manager or ensure close() is called.
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def load_teams_into_db(conn: sqlite3.Connection, teams_path: Path) -> int:
    """
    Seed teams from JSON ([{"name": ..., "strength": ...}, ...] or {"teams": [...]}).
    Only runs when the teams table is empty; returns the number of teams inserted.
    """
    (existing,) = conn.execute("SELECT COUNT(*) FROM teams").fetchone()
    if existing:
        return 0
    with open(teams_path, encoding="utf-8") as f:
        data = json.load(f)
    entries = data["teams"] if isinstance(data, dict) else data
    repo = TeamRepository()
    for t in entries:
        repo.create(conn, str(t["name"]), int(t.get("strength", 50)))
    logger.info("Seeded %d teams from %s", len(entries), teams_path)
    return len(entries)


def init_db(
    db_path: str | Path | None = None,
    teams_path: str | Path | None = None,
) -> None:
    """
    Create or ensure all tables exist.
    If teams_path is provided and no teams exist yet, also seed teams from that JSON file.
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(all_schema_sql())
        conn.commit()
        if teams_path:
            load_teams_into_db(conn, Path(teams_path))
    finally:
        conn.close()
