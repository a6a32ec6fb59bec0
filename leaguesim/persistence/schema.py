"""
SQLite schema for league entities.
Migration-friendly: each table created with IF NOT EXISTS.
"""
from __future__ import annotations


def teams_schema() -> str:
    """Seeded once per league; strength drives simulated scoring (roughly 1-100)."""
    return """
    CREATE TABLE IF NOT EXISTS teams (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        strength INTEGER NOT NULL DEFAULT 50,
        created_at TEXT NOT NULL
    );
    """


def games_schema() -> str:
    """Fixture in the double round-robin. Scores NULL until played."""
    return """
    CREATE TABLE IF NOT EXISTS games (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        week INTEGER NOT NULL,
        home_team_id INTEGER NOT NULL,
        away_team_id INTEGER NOT NULL,
        home_score INTEGER,
        away_score INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (home_team_id) REFERENCES teams(id) ON DELETE CASCADE,
        FOREIGN KEY (away_team_id) REFERENCES teams(id) ON DELETE CASCADE,
        UNIQUE (home_team_id, away_team_id, week)
    );
    CREATE INDEX IF NOT EXISTS ix_games_week ON games(week);
    CREATE INDEX IF NOT EXISTS ix_games_home ON games(home_team_id);
    CREATE INDEX IF NOT EXISTS ix_games_away ON games(away_team_id);
    """


def all_schema_sql() -> str:
    """Combine all schema DDL for a single execution. Order: teams, games."""
    return "\n".join([
        teams_schema(),
        games_schema(),
    ])
