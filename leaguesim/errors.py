"""
Error kinds raised by the league core. The API layer maps them to HTTP responses.
"""
from __future__ import annotations


class LeagueError(Exception):
    """Base class for league core failures."""


class NotFound(LeagueError, LookupError):
    """Referenced entity (e.g. a game id) does not exist."""


class ValidationError(LeagueError, ValueError):
    """Caller-supplied values are out of range (e.g. negative or non-integer scores)."""


class DomainError(LeagueError, ValueError):
    """Input is structurally inconsistent (e.g. zero total strength, too few teams)."""
