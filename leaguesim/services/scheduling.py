"""
Double round-robin fixture generation for the league.

Every team meets every other team twice, once at home and once away. The first half
of the season has N-1 weeks (N even after padding); the second half replays the same
pairings with home/away swapped, for 2(N-1) weeks in total.

BYE handling: when the number of teams is odd, a virtual BYE is appended. The team
drawn against BYE sits that week out and no fixture is emitted for it.

Uses the circle method: fix the first slot, rotate the others each week. Same team
list ordering yields the same schedule.
"""
from __future__ import annotations

from typing import Any, Hashable


class _Bye:
    """Placeholder slot for odd-sized leagues. Never equal to a real team id."""

    def __repr__(self) -> str:
        return "BYE"


BYE = _Bye()


def total_weeks(team_count: int) -> int:
    """Season length for team_count teams: 2(N-1) with N padded to even; 0 if degenerate."""
    if team_count < 2:
        return 0
    n = team_count + (team_count % 2)
    return 2 * (n - 1)


def round_robin_pairings(team_ids: list[Hashable]) -> list[tuple[int, Any, Any]]:
    """
    Generate double round-robin pairings: (week, home_team_id, away_team_id).
    Pairings against BYE are dropped. Fewer than 2 teams => no fixtures.
    """
    if len(team_ids) < 2:
        return []
    order: list[Any] = list(team_ids)
    if len(order) % 2 == 1:
        order.append(BYE)
    n = len(order)
    half = n - 1
    result: list[tuple[int, Any, Any]] = []
    for rnd in range(2 * half):
        # Pair order[i] with order[n-1-i]
        for i in range(n // 2):
            home, away = order[i], order[n - 1 - i]
            if home is BYE or away is BYE:
                continue
            if rnd >= half:
                # order repeats with period n-1, so this is the mirrored first-half pairing
                home, away = away, home
            result.append((rnd + 1, home, away))
        # Rotate: keep order[0], last element moves to slot 1, the rest shift right
        order = [order[0], order[-1]] + order[1:-1]
    return result


def generate_league_schedule(team_ids: list[Hashable]) -> list[dict[str, Any]]:
    """
    Return fixtures ready for a bulk insert: { "week": int, "home_team_id", "away_team_id" }.
    No existence check here; callers guard against generating twice.
    """
    return [
        {"week": w, "home_team_id": h, "away_team_id": a}
        for w, h, a in round_robin_pairings(team_ids)
    ]
