"""Constraint validation for the league slot scheduler.

Checks a generated schedule independently of how it was built.
"""

from collections import defaultdict
from datetime import date, time

from jbsg.models import FixType, League, ScheduleResult


def validate_schedule(result: ScheduleResult, leagues: dict[str, League],
                      fix_types: dict[str, FixType] | None = None) -> dict:
    """Validate a schedule against all constraints.

    Returns dict with:
    - valid: bool (True if no hard constraint violations)
    - errors: list of hard constraint violations
    - warnings: list of soft constraint issues
    """
    fix_types = fix_types or {}
    errors = []
    warnings = []

    for u in result.unscheduled:
        p = u.pair
        errors.append(
            f"UNSCHEDULED: {p.home} vs {p.away} ({p.league}) on {u.date}"
        )

    # Per date: (league, team) -> count, (stadium, time) -> count
    team_games: dict[date, dict[tuple[str, str], int]] = defaultdict(
        lambda: defaultdict(int))
    slot_games: dict[date, dict[tuple[str, time], int]] = defaultdict(
        lambda: defaultdict(int))
    day_times: dict[date, set[time]] = defaultdict(set)
    meetings: dict[str, dict[tuple[str, str], int]] = defaultdict(
        lambda: defaultdict(int))

    for m in result.matches:
        league = leagues.get(m.league)
        if league is None:
            errors.append(f"Match {m.home} vs {m.away} in unknown league "
                          f"{m.league}")
            continue
        if m.home == m.away:
            errors.append(f"{m.home} plays itself on {m.date}")
        for t in (m.home, m.away):
            if t not in league.teams:
                errors.append(f"{t} is not in league {m.league} "
                              f"({m.date})")
            team_games[m.date][(m.league, t)] += 1

        slot_games[m.date][(m.stadium, m.start_time)] += 1
        day_times[m.date].add(m.start_time)
        meetings[m.league][(min(m.home, m.away), max(m.home, m.away))] += 1

    # Check: no team plays twice on one date
    for d, counts in sorted(team_games.items()):
        for (league_name, team), count in counts.items():
            if count > 1:
                errors.append(
                    f"{team} ({league_name}) plays {count} games on {d}"
                )

    # Check: one match per stadium and start time
    for d, counts in sorted(slot_games.items()):
        for (stadium, start), count in counts.items():
            if count > 1:
                errors.append(
                    f"{count} matches at {stadium} {start:%H:%M} on {d}"
                )

    # Check: fixed teams at the edges of their day
    for m in result.matches:
        if m.is_concession or m.fix_type == FixType.NONE:
            continue
        times = day_times[m.date]
        if m.fix_type == FixType.FIRST and m.start_time != min(times):
            warnings.append(
                f"First-fixed match {m.home} vs {m.away} on {m.date} "
                f"starts {m.start_time:%H:%M}, earliest is "
                f"{min(times):%H:%M}"
            )
        elif m.fix_type == FixType.LAST and m.start_time != max(times):
            warnings.append(
                f"Last-fixed match {m.home} vs {m.away} on {m.date} "
                f"starts {m.start_time:%H:%M}, latest is "
                f"{max(times):%H:%M}"
            )

    # Check: meeting counts even within each league
    for league_name, league in leagues.items():
        teams = league.teams
        if len(teams) < 2:
            continue
        counts = [
            meetings[league_name].get((min(t1, t2), max(t1, t2)), 0)
            for i, t1 in enumerate(teams) for t2 in teams[i + 1:]
        ]
        if max(counts) - min(counts) > 1:
            warnings.append(
                f"League {league_name} meeting counts range "
                f"{min(counts)}-{max(counts)}"
            )

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
    }


def format_validation_report(result: dict) -> str:
    """Format validation results as text."""
    lines = []
    lines.append("=" * 60)
    lines.append("SCHEDULE VALIDATION REPORT")
    lines.append("=" * 60)

    if result["valid"]:
        lines.append("\nRESULT: VALID (no hard constraint violations)")
    else:
        lines.append(f"\nRESULT: INVALID ({len(result['errors'])} violations)")

    if result["errors"]:
        lines.append(f"\n--- ERRORS ({len(result['errors'])}) ---")
        for e in result["errors"]:
            lines.append(f"  ERROR: {e}")

    if result["warnings"]:
        lines.append(f"\n--- WARNINGS ({len(result['warnings'])}) ---")
        for w in result["warnings"]:
            lines.append(f"  WARN: {w}")

    return "\n".join(lines)
