"""
League-centric service: fixture bootstrap, week advancement, result correction,
and the read-side standings / predictions.
Persistence is delegated to the team and game stores; each score write is its own commit.
"""
from __future__ import annotations

import logging
from typing import Any

from leaguesim.config import get_settings
from leaguesim.errors import DomainError, NotFound, ValidationError
from leaguesim.models import Game, Prediction, Standing, Team
from leaguesim.persistence.repositories import GameRepository, TeamRepository
from leaguesim.persistence.stores import GameStore, TeamStore
from leaguesim.services.predictions import compute_predictions
from leaguesim.services.scheduling import generate_league_schedule
from leaguesim.services.standings import compute_standings
from leaguesim.simulation.match_simulator import RandomSource, simulate_score
from leaguesim.simulation.rng import SeededRNG

logger = logging.getLogger(__name__)


def _validate_score(name: str, value: Any) -> int:
    # bool is an int subclass; True/False are not scores
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{name} must be an integer (got {value!r})")
    if value < 0:
        raise ValidationError(f"{name} must be non-negative (got {value})")
    return value


# ---------- LeagueService ----------


class LeagueService:
    """
    Season runner over a single league. Callers serialize season-mutating
    operations (one writer per season); reads are safe at any time.
    """

    def __init__(
        self,
        team_repo: TeamStore | None = None,
        game_repo: GameStore | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self._team_repo = team_repo if team_repo is not None else TeamRepository()
        self._game_repo = game_repo if game_repo is not None else GameRepository()
        self._rng = rng if rng is not None else SeededRNG()

    def _rng_for(self, seed: int | None) -> RandomSource:
        return SeededRNG(seed) if seed is not None else self._rng

    # ---------- Fixtures ----------

    def generate_fixtures(self, conn: Any) -> int:
        """
        Build the double round-robin from all teams and insert it as one batch.
        No existence check; use ensure_fixtures for the bootstrap path.
        """
        team_ids = self._team_repo.list_ids(conn)
        if len(team_ids) < 2:
            raise DomainError(f"Need at least 2 teams to generate fixtures (have {len(team_ids)})")
        fixtures = generate_league_schedule(team_ids)
        self._game_repo.insert_many(conn, fixtures)
        logger.info("Generated %d fixtures for %d teams", len(fixtures), len(team_ids))
        return len(fixtures)

    def ensure_fixtures(self, conn: Any) -> bool:
        """
        Season bootstrap: generate fixtures only if no games exist yet.
        Returns True if fixtures were inserted by this call.
        """
        if self._game_repo.count(conn) > 0:
            return False
        team_ids = self._team_repo.list_ids(conn)
        if len(team_ids) < 2:
            logger.warning("Skipping fixture generation: %d team(s) registered", len(team_ids))
            return False
        fixtures = generate_league_schedule(team_ids)
        inserted = self._game_repo.insert_many_if_empty(conn, fixtures)
        if inserted:
            logger.info("Season bootstrapped: %d fixtures for %d teams", len(fixtures), len(team_ids))
        return inserted

    # ---------- Simulation ----------

    def _play(self, conn: Any, games: list[Game], rng: RandomSource, teams: dict[int, Team]) -> None:
        for g in games:
            if g.is_played:
                continue
            home, away = teams.get(g.home_team_id), teams.get(g.away_team_id)
            if home is None or away is None:
                raise DomainError(f"Game {g.id} references an unknown team")
            g.home_score, g.away_score = simulate_score(home.strength, away.strength, rng)
            self._game_repo.update_scores(conn, g.id, g.home_score, g.away_score)
            logger.debug(
                "Week %d: %s %d - %d %s", g.week, home.name, g.home_score, g.away_score, away.name
            )

    def play_next_week(self, conn: Any, seed: int | None = None) -> list[Game]:
        """
        Simulate the lowest week that still has an unplayed game and return that week's games.
        Already-played games in the week (e.g. manual corrections) are kept as they are.
        Returns [] once every game has been played.
        """
        week = self._game_repo.min_unplayed_week(conn)
        if week is None:
            logger.info("No unplayed weeks left")
            return []
        games = self._game_repo.list_by_week(conn, week)
        teams = {t.id: t for t in self._team_repo.list_all(conn)}
        self._play(conn, games, self._rng_for(seed), teams)
        logger.info("Played week %d (%d games)", week, len(games))
        return games

    def play_all_weeks(self, conn: Any, seed: int | None = None) -> list[Game]:
        """Simulate every unplayed game in the season; return the full fixture list."""
        pending = self._game_repo.list_unplayed(conn)
        teams = {t.id: t for t in self._team_repo.list_all(conn)}
        self._play(conn, pending, self._rng_for(seed), teams)
        logger.info("Played all remaining games (%d simulated)", len(pending))
        return self._game_repo.list_all(conn)

    def override_result(self, conn: Any, game_id: int, home_score: Any, away_score: Any) -> Game:
        """Set a game's scores directly, bypassing simulation."""
        home = _validate_score("home_score", home_score)
        away = _validate_score("away_score", away_score)
        game = self._game_repo.get(conn, game_id)
        if game is None:
            raise NotFound(f"Game not found: {game_id}")
        self._game_repo.update_scores(conn, game.id, home, away)
        game.home_score, game.away_score = home, away
        logger.info("Result overridden: game %s -> %d-%d", game_id, home, away)
        return game

    # ---------- Read side ----------

    def standings(self, conn: Any) -> list[Standing]:
        return compute_standings(self._team_repo.list_with_games(conn))

    def predictions(self, conn: Any, min_week: int | None = None) -> list[Prediction]:
        gate = min_week if min_week is not None else get_settings().prediction_min_week
        return compute_predictions(
            self._team_repo.list_all(conn),
            self._game_repo.max_played_week(conn),
            min_week=gate,
        )

    def current_week(self, conn: Any) -> int:
        """Highest week with a played game; 0 before the season starts."""
        return self._game_repo.max_played_week(conn) or 0

    def fixtures(self, conn: Any) -> list[Game]:
        return self._game_repo.list_all(conn)

    def teams(self, conn: Any) -> list[Team]:
        return self._team_repo.list_all(conn)
