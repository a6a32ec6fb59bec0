"""
REST API for the league simulator.
Thin wrappers around LeagueService and persistence; errors are translated here.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager, contextmanager
from typing import Any, AsyncGenerator, Generator

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from leaguesim.config import get_settings
from leaguesim.errors import DomainError, NotFound, ValidationError
from leaguesim.logging_config import setup_logging
from leaguesim.models import Game, Team
from leaguesim.persistence import get_connection, get_db_path, init_db
from leaguesim.services.league_service import LeagueService

logger = logging.getLogger(__name__)


@contextmanager
def db_conn() -> Generator:
    """Yield a DB connection, ensure close on exit."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Startup: ensure DB and seed teams ----------
def _ensure_db() -> None:
    settings = get_settings()
    teams_path = settings.teams_path if settings.teams_path.exists() else None
    init_db(db_path=get_db_path(), teams_path=teams_path)


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging(level=get_settings().log_level)
    _ensure_db()
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="League Simulator API",
    description="Double round-robin league: fixtures, simulation, standings and predictions",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------- Request models ----------


class EditMatchRequest(BaseModel):
    home_score: int = Field(..., ge=0)
    away_score: int = Field(..., ge=0)


class PlayRequest(BaseModel):
    seed: int | None = Field(None, description="RNG seed for a reproducible run")


# ---------- Helpers ----------


def _league_service(conn) -> LeagueService:
    """Service for this request; bootstraps fixtures the first time games are empty."""
    svc = LeagueService()
    svc.ensure_fixtures(conn)
    return svc


def _game_out(game: Game, teams: dict[int, Team]) -> dict[str, Any]:
    home = teams.get(game.home_team_id)
    away = teams.get(game.away_team_id)
    return {
        "id": game.id,
        "week": game.week,
        "home_team": {"id": game.home_team_id, "name": home.name if home else None},
        "away_team": {"id": game.away_team_id, "name": away.name if away else None},
        "home_score": game.home_score,
        "away_score": game.away_score,
    }


def _games_out(svc: LeagueService, conn, games: list[Game]) -> list[dict[str, Any]]:
    teams = {t.id: t for t in svc.teams(conn)}
    return [_game_out(g, teams) for g in games]


# ---------- Teams ----------


@app.get("/teams")
def list_teams() -> dict[str, Any]:
    with db_conn() as conn:
        svc = LeagueService()
        return {"teams": [t.to_dict() for t in svc.teams(conn)]}


# ---------- League ----------


@app.get("/league/standings")
def get_standings() -> dict[str, Any]:
    """League table: played, won, drawn, lost, for, against, gd, points."""
    with db_conn() as conn:
        svc = _league_service(conn)
        return {"standings": [s.to_dict() for s in svc.standings(conn)]}


@app.get("/league/current-week")
def get_current_week() -> dict[str, Any]:
    with db_conn() as conn:
        svc = _league_service(conn)
        return {"current_week": svc.current_week(conn)}


@app.get("/league/predictions")
def get_predictions() -> dict[str, Any]:
    """Empty until enough weeks are played."""
    with db_conn() as conn:
        svc = _league_service(conn)
        try:
            rows = svc.predictions(conn)
        except DomainError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"predictions": [p.to_dict() for p in rows]}


@app.get("/league/fixtures")
def get_fixtures() -> dict[str, Any]:
    with db_conn() as conn:
        svc = _league_service(conn)
        return {"fixtures": _games_out(svc, conn, svc.fixtures(conn))}


@app.put("/league/match/{game_id}")
def edit_match(game_id: int, req: EditMatchRequest) -> dict[str, Any]:
    """Correct one game's result without simulation."""
    with db_conn() as conn:
        svc = _league_service(conn)
        try:
            game = svc.override_result(conn, game_id, req.home_score, req.away_score)
        except NotFound as e:
            raise HTTPException(status_code=404, detail=str(e))
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=str(e))
        teams = {t.id: t for t in svc.teams(conn)}
        return {"game": _game_out(game, teams)}


@app.post("/league/next-week")
def play_next_week(req: PlayRequest | None = None) -> dict[str, Any]:
    """Simulate the next unplayed week. No-op (empty games) once the season is over."""
    with db_conn() as conn:
        svc = _league_service(conn)
        try:
            games = svc.play_next_week(conn, seed=req.seed if req else None)
        except DomainError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {
            "week": games[0].week if games else None,
            "games": _games_out(svc, conn, games),
        }


@app.post("/league/play-all")
def play_all(req: PlayRequest | None = None) -> dict[str, Any]:
    """Simulate every remaining game; returns the full fixture list."""
    with db_conn() as conn:
        svc = _league_service(conn)
        try:
            games = svc.play_all_weeks(conn, seed=req.seed if req else None)
        except DomainError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"games": _games_out(svc, conn, games)}
