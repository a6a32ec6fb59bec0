#!/usr/bin/env python3
"""
Run a whole league season from the terminal: seed teams → generate fixtures →
play (week by week or all at once) → print standings and predictions.
Run from project root: python3 scripts/run_season.py --weekly --seed 7
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from leaguesim.errors import DomainError
from leaguesim.logging_config import get_logger, setup_logging
from leaguesim.models import Standing
from leaguesim.persistence import get_connection, init_db, set_db_path
from leaguesim.services.league_service import LeagueService
from leaguesim.simulation import SeededRNG


def _print_table(standings: list[Standing]) -> None:
    print(f"  {'Team':<20} {'P':>3} {'W':>3} {'D':>3} {'L':>3} {'F':>4} {'A':>4} {'GD':>4} {'Pts':>4}")
    for s in standings:
        print(
            f"  {s.team_name:<20} {s.played:>3} {s.won:>3} {s.drawn:>3} {s.lost:>3} "
            f"{s.goals_for:>4} {s.goals_against:>4} {s.goal_difference:>4} {s.points:>4}"
        )


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a double round-robin league season.")
    parser.add_argument("--db", type=Path, default=PROJECT_ROOT / "data" / "season_demo.db")
    parser.add_argument("--teams", type=Path, default=PROJECT_ROOT / "data" / "teams.json")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for a reproducible season")
    parser.add_argument("--weekly", action="store_true", help="Play week by week, printing the table each week")
    parser.add_argument("--min-week", type=int, default=4, help="Weeks played before predictions open")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(level="DEBUG" if args.verbose else "INFO")
    set_db_path(args.db)
    init_db(db_path=args.db, teams_path=args.teams)

    logger = get_logger()
    rng = SeededRNG(args.seed)
    logger.info("Season seed: %s", rng.seed if rng.seed is not None else "random")

    conn = get_connection()
    try:
        svc = LeagueService(rng=rng)
        svc.ensure_fixtures(conn)
        teams = {t.id: t.name for t in svc.teams(conn)}

        if args.weekly:
            while True:
                games = svc.play_next_week(conn)
                if not games:
                    break
                print(f"\nWeek {games[0].week}")
                for g in games:
                    print(f"  {teams[g.home_team_id]} {g.home_score} - {g.away_score} {teams[g.away_team_id]}")
                _print_table(svc.standings(conn))
                try:
                    predictions = svc.predictions(conn, min_week=args.min_week)
                except DomainError as e:
                    raise SystemExit(str(e))
                for p in predictions:
                    print(f"  {teams[p.team_id]:<20} {p.probability:6.2f}%")
        else:
            games = svc.play_all_weeks(conn)
            logger.info("Season complete: %d games over %d weeks", len(games), svc.current_week(conn))

        print("\nFinal table")
        _print_table(svc.standings(conn))
    finally:
        conn.close()


if __name__ == "__main__":
    main()
