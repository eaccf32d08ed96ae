"""Statistics and balance reporting for the league slot scheduler."""

from collections import defaultdict

from jbsg.models import FixType, League, Match


def compute_stats(matches: list[Match], leagues: dict[str, League],
                  stadiums: list[str],
                  fix_types: dict[str, FixType] | None = None) -> dict:
    """Compute per-team and per-stadium statistics for a schedule.

    Team counts are keyed by league first, since team names are only
    unique within their league. ``fixed_edges`` counts, per fixed team,
    how many of its matches took the day's first and last used slot.
    """
    fix_types = fix_types or {}
    team_counts: dict[str, dict[str, int]] = {
        name: {t: 0 for t in league.teams} for name, league in leagues.items()
    }
    stadium_counts: dict[str, dict[str, int]] = {
        name: {s: 0 for s in stadiums} for name in leagues
    }
    month_counts: dict[int, int] = defaultdict(int)
    fixed_edges: dict[str, dict[str, int]] = {
        t: {"matches": 0, "first": 0, "last": 0} for t in sorted(fix_types)
    }
    summer_count = 0
    concession_count = 0

    # Earliest/latest slot index used on each date
    day_bounds: dict = {}
    for m in matches:
        lo, hi = day_bounds.get(m.date, (m.slot_index, m.slot_index))
        day_bounds[m.date] = (min(lo, m.slot_index), max(hi, m.slot_index))

    for m in matches:
        league_teams = team_counts.setdefault(m.league, {})
        league_teams[m.home] = league_teams.get(m.home, 0) + 1
        league_teams[m.away] = league_teams.get(m.away, 0) + 1

        league_stadiums = stadium_counts.setdefault(m.league, {})
        league_stadiums[m.stadium] = league_stadiums.get(m.stadium, 0) + 1

        month_counts[m.month] += 1
        if m.is_summer_time:
            summer_count += 1
        if m.is_concession:
            concession_count += 1

        lo, hi = day_bounds[m.date]
        for t in (m.home, m.away):
            if t not in fixed_edges:
                continue
            fixed_edges[t]["matches"] += 1
            if m.slot_index == lo:
                fixed_edges[t]["first"] += 1
            if m.slot_index == hi:
                fixed_edges[t]["last"] += 1

    return {
        "total_matches": len(matches),
        "team_counts": team_counts,
        "stadium_counts": stadium_counts,
        "month_counts": dict(sorted(month_counts.items())),
        "fixed_edges": fixed_edges,
        "summer_count": summer_count,
        "concession_count": concession_count,
    }


def format_stats_report(stats: dict, bar_width: int = 20) -> str:
    """Format statistics into a human-readable report."""
    lines = []
    lines.append("=" * 70)
    lines.append("SCHEDULE STATISTICS")
    lines.append("=" * 70)
    lines.append(f"Total matches: {stats['total_matches']}  "
                 f"(summer times: {stats['summer_count']}, "
                 f"concession: {stats['concession_count']})")

    # Stadium distribution per league
    lines.append("\n--- STADIUM DISTRIBUTION ---")
    for league_name, counts in stats["stadium_counts"].items():
        total = sum(counts.values()) or 1
        lines.append(f"\n{league_name}")
        for stadium, c in counts.items():
            filled = round(bar_width * c / total)
            bar = "#" * filled + "." * (bar_width - filled)
            lines.append(f"  {stadium:<10} {bar} {c:>4} "
                         f"({100 * c / total:5.1f}%)")

    # Matches per team
    lines.append("\n--- MATCHES PER TEAM ---")
    for league_name, counts in stats["team_counts"].items():
        values = list(counts.values())
        spread = f" spread {max(values) - min(values)}" if values else ""
        lines.append(f"\n{league_name}{spread}")
        for team, c in counts.items():
            lines.append(f"  {team:<16} {c:>4}")

    if stats["fixed_edges"]:
        lines.append("\n--- FIXED TEAMS (first / last slot of day) ---")
        for team, e in stats["fixed_edges"].items():
            lines.append(f"  {team:<16} {e['matches']:>4} matches  "
                         f"first {e['first']:>3}  last {e['last']:>3}")

    # Matches per month
    lines.append("\n--- MATCHES PER MONTH ---")
    for month, c in stats["month_counts"].items():
        lines.append(f"  {month:>2}: {c:>4}")

    return "\n".join(lines)
