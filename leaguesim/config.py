"""
Runtime settings, read from the environment with local-dev defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    teams_path: Path
    prediction_min_week: int
    log_level: str
    cors_origins: tuple[str, ...]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load settings once per process.

    LEAGUE_DB_PATH              SQLite file (default: <project>/data/league.db)
    LEAGUE_TEAMS_PATH           seed teams JSON (default: <project>/data/teams.json)
    LEAGUE_PREDICTION_MIN_WEEK  weeks played before predictions open (default: 4)
    LEAGUE_LOG_LEVEL            logging level name (default: INFO)
    LEAGUE_CORS_ORIGINS         comma-separated origins for the API
    """
    root = _project_root()
    origins = os.environ.get("LEAGUE_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return Settings(
        db_path=Path(os.environ.get("LEAGUE_DB_PATH", str(root / "data" / "league.db"))),
        teams_path=Path(os.environ.get("LEAGUE_TEAMS_PATH", str(root / "data" / "teams.json"))),
        prediction_min_week=int(os.environ.get("LEAGUE_PREDICTION_MIN_WEEK", "4")),
        log_level=os.environ.get("LEAGUE_LOG_LEVEL", "INFO").upper(),
        cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
    )
