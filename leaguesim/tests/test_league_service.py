"""
Tests for the season runner: bootstrap, week advancement, overrides, read side.
Runs against the in-memory stores and against a temporary SQLite DB.
"""
from __future__ import annotations

import threading
from pathlib import Path

import pytest

from leaguesim.errors import DomainError, NotFound, ValidationError
from leaguesim.models import Team
from leaguesim.persistence.db import get_connection, init_db, set_db_path
from leaguesim.persistence.memory import InMemoryGameStore, InMemoryTeamStore
from leaguesim.persistence.repositories import GameRepository, TeamRepository
from leaguesim.services.league_service import LeagueService
from leaguesim.services.scheduling import generate_league_schedule
from leaguesim.simulation import SeededRNG

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

TEAMS = [
    Team(id=1, name="Chelsea", strength=90),
    Team(id=2, name="Arsenal", strength=85),
    Team(id=3, name="Manchester City", strength=88),
    Team(id=4, name="Liverpool", strength=87),
]


@pytest.fixture
def stores():
    games = InMemoryGameStore()
    teams = InMemoryTeamStore(TEAMS, games=games)
    return teams, games


@pytest.fixture
def league_service(stores):
    teams, games = stores
    svc = LeagueService(team_repo=teams, game_repo=games, rng=SeededRNG(2024))
    svc.ensure_fixtures(None)
    return svc


@pytest.fixture
def db_conn(tmp_path):
    """Temporary DB with schema and the four seed teams."""
    db_path = tmp_path / "league_test.db"
    set_db_path(db_path)
    init_db(db_path=db_path, teams_path=PROJECT_ROOT / "data" / "teams.json")
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


# ---------- Bootstrap ----------


def test_ensure_fixtures_four_teams(league_service, stores):
    _, games = stores
    assert games.count(None) == 12
    fixtures = league_service.fixtures(None)
    assert sorted({g.week for g in fixtures}) == [1, 2, 3, 4, 5, 6]
    assert all(len([g for g in fixtures if g.week == w]) == 2 for w in range(1, 7))
    assert all(not g.is_played for g in fixtures)


def test_ensure_fixtures_is_idempotent(league_service, stores):
    _, games = stores
    assert league_service.ensure_fixtures(None) is False
    assert games.count(None) == 12


def test_ensure_fixtures_skips_degenerate_league():
    games = InMemoryGameStore()
    svc = LeagueService(InMemoryTeamStore([TEAMS[0]], games=games), games)
    assert svc.ensure_fixtures(None) is False
    assert games.count(None) == 0


def test_generate_fixtures_needs_two_teams():
    games = InMemoryGameStore()
    svc = LeagueService(InMemoryTeamStore([], games=games), games)
    with pytest.raises(DomainError):
        svc.generate_fixtures(None)


def test_concurrent_bootstrap_inserts_once():
    games = InMemoryGameStore()
    teams = InMemoryTeamStore(TEAMS, games=games)
    results: list[bool] = []

    def boot():
        results.append(LeagueService(teams, games).ensure_fixtures(None))

    threads = [threading.Thread(target=boot) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert results.count(True) == 1
    assert games.count(None) == 12


# ---------- Playing weeks ----------


def test_play_next_week_plays_lowest_week(league_service):
    games = league_service.play_next_week(None)
    assert len(games) == 2
    assert {g.week for g in games} == {1}
    assert all(g.is_played and g.home_score >= 0 and g.away_score >= 0 for g in games)
    assert league_service.current_week(None) == 1


def test_play_next_week_until_done(league_service):
    weeks = []
    while True:
        games = league_service.play_next_week(None)
        if not games:
            break
        weeks.append(games[0].week)
    assert weeks == [1, 2, 3, 4, 5, 6]
    assert all(g.is_played for g in league_service.fixtures(None))
    assert league_service.play_next_week(None) == []


def test_play_next_week_keeps_manual_result(league_service):
    week1 = [g for g in league_service.fixtures(None) if g.week == 1]
    league_service.override_result(None, week1[0].id, 5, 2)
    played = league_service.play_next_week(None)
    kept = next(g for g in played if g.id == week1[0].id)
    assert (kept.home_score, kept.away_score) == (5, 2)
    assert all(g.is_played for g in played)


def test_play_all_weeks(league_service):
    games = league_service.play_all_weeks(None)
    assert len(games) == 12
    assert all(g.is_played for g in games)
    assert league_service.current_week(None) == 6
    assert league_service.play_next_week(None) == []


def test_same_seed_same_season():
    def run(seed):
        games = InMemoryGameStore()
        svc = LeagueService(InMemoryTeamStore(TEAMS, games=games), games)
        svc.ensure_fixtures(None)
        return [(g.id, g.home_score, g.away_score) for g in svc.play_all_weeks(None, seed=seed)]

    assert run(11) == run(11)


# ---------- Overrides ----------


def test_override_updates_standings(league_service):
    game = league_service.fixtures(None)[0]
    before = {s.team_id: s for s in league_service.standings(None)}[game.home_team_id]
    updated = league_service.override_result(None, game.id, 5, 2)
    assert (updated.home_score, updated.away_score) == (5, 2)
    after = {s.team_id: s for s in league_service.standings(None)}[game.home_team_id]
    assert after.played == before.played + 1
    assert after.won == before.won + 1
    assert after.points == before.points + 3
    assert after.goal_difference == before.goal_difference + 3


def test_override_unknown_game(league_service):
    with pytest.raises(NotFound):
        league_service.override_result(None, 999, 1, 0)


@pytest.mark.parametrize("home,away", [(-1, 0), (0, -3), (1.5, 0), ("2", 1), (True, 0)])
def test_override_rejects_bad_scores(league_service, home, away):
    with pytest.raises(ValidationError):
        league_service.override_result(None, 1, home, away)


# ---------- Read side ----------


def test_predictions_gate(league_service):
    for _ in range(3):
        league_service.play_next_week(None)
    assert league_service.predictions(None) == []
    league_service.play_next_week(None)
    preds = league_service.predictions(None)
    assert len(preds) == 4
    assert sum(p.probability for p in preds) == pytest.approx(100, abs=0.1)


def test_predictions_explicit_gate(league_service):
    league_service.play_next_week(None)
    assert len(league_service.predictions(None, min_week=1)) == 4


def test_standings_before_any_game(league_service):
    table = league_service.standings(None)
    assert len(table) == 4
    assert all(s.played == 0 and s.points == 0 for s in table)


# ---------- SQLite-backed ----------


def test_sqlite_season_end_to_end(db_conn):
    svc = LeagueService(rng=SeededRNG(5))
    assert svc.ensure_fixtures(db_conn) is True
    assert svc.ensure_fixtures(db_conn) is False
    assert GameRepository().count(db_conn) == 12

    week1 = svc.play_next_week(db_conn)
    assert [g.week for g in week1] == [1, 1]
    stored = GameRepository().list_by_week(db_conn, 1)
    assert [(g.home_score, g.away_score) for g in stored] == [(g.home_score, g.away_score) for g in week1]

    svc.play_all_weeks(db_conn)
    assert GameRepository().min_unplayed_week(db_conn) is None
    assert svc.current_week(db_conn) == 6
    table = svc.standings(db_conn)
    assert sum(s.played for s in table) == 24
    assert len(svc.predictions(db_conn)) == 4


def test_sqlite_override_and_not_found(db_conn):
    svc = LeagueService()
    svc.ensure_fixtures(db_conn)
    game = svc.fixtures(db_conn)[0]
    svc.override_result(db_conn, game.id, 3, 3)
    stored = GameRepository().get(db_conn, game.id)
    assert (stored.home_score, stored.away_score) == (3, 3)
    with pytest.raises(NotFound):
        svc.override_result(db_conn, 10_000, 1, 1)


def test_sqlite_teams_seeded_once(db_conn, tmp_path):
    init_db(db_path=tmp_path / "league_test.db", teams_path=PROJECT_ROOT / "data" / "teams.json")
    teams = TeamRepository().list_all(db_conn)
    assert [t.name for t in teams] == ["Chelsea", "Arsenal", "Manchester City", "Liverpool"]
    assert [t.strength for t in teams] == [90, 85, 88, 87]
    repo = TeamRepository()
    assert repo.get(db_conn, teams[0].id) == teams[0]
    assert repo.get(db_conn, 999) is None


# ---------- SQLite bootstrap guard ----------


def test_sqlite_insert_many_if_empty_only_once(db_conn):
    fixtures = generate_league_schedule(TeamRepository().list_ids(db_conn))
    repo = GameRepository()
    assert repo.insert_many_if_empty(db_conn, fixtures) is True
    assert repo.count(db_conn) == 12
    assert repo.insert_many_if_empty(db_conn, fixtures) is False
    assert repo.count(db_conn) == 12
    assert not db_conn.in_transaction


def test_sqlite_insert_many_if_empty_ends_open_transaction(db_conn, tmp_path):
    db_conn.execute(
        "INSERT INTO teams (name, strength, created_at) VALUES (?, ?, ?)",
        ("Everton", 70, "2024-01-01T00:00:00+00:00"),
    )
    assert db_conn.in_transaction
    GameRepository().insert_many_if_empty(db_conn, [])
    other = get_connection(tmp_path / "league_test.db")
    try:
        names = [t.name for t in TeamRepository().list_all(other)]
    finally:
        other.close()
    assert "Everton" in names


def test_sqlite_concurrent_bootstrap_inserts_once(db_conn):
    results: list[bool] = []
    errors: list[BaseException] = []

    def boot():
        conn = get_connection()
        try:
            results.append(LeagueService().ensure_fixtures(conn))
        except BaseException as e:
            errors.append(e)
        finally:
            conn.close()

    threads = [threading.Thread(target=boot) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert errors == []
    assert results.count(True) == 1
    assert GameRepository().count(db_conn) == 12
