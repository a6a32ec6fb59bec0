"""
Persistence layer for league data.
Read/write interfaces only; no business logic or simulation.
"""
from .db import get_connection, get_db_path, init_db, set_db_path
from .memory import InMemoryGameStore, InMemoryTeamStore
from .repositories import GameRepository, TeamRepository
from .stores import GameStore, TeamStore

__all__ = [
    "get_connection",
    "get_db_path",
    "init_db",
    "set_db_path",
    "InMemoryGameStore",
    "InMemoryTeamStore",
    "GameRepository",
    "TeamRepository",
    "GameStore",
    "TeamStore",
]
