"""Config loading, saving and editing for the league slot scheduler."""

from datetime import date, time
from pathlib import Path

import yaml

from jbsg.models import (
    DayOfWeek, FixType, League, RoundPolicy, SummerWindow, TimeSlots,
    fix_types_from_sets,
)

DEFAULT_SATURDAY_MARKERS = ["토요", "Sat"]


class ConfigError(ValueError):
    """Config cannot describe a valid season."""

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(
            "Config validation errors:\n" + "\n".join(f"  {e}" for e in errors)
        )


def parse_time(s: str) -> time:
    """Parse time strings like '5:30pm', '10am', '17:00'."""
    s = s.strip()
    s_lower = s.lower()

    is_pm = s_lower.endswith("pm")
    is_am = s_lower.endswith("am")

    # Strip am/pm suffix
    s_clean = s_lower
    if is_pm or is_am:
        s_clean = s_clean[:-2].strip()

    if ":" in s_clean:
        parts = s_clean.split(":")
        h = int(parts[0])
        m = int(parts[1])
    else:
        h = int(s_clean)
        m = 0

    if is_pm and h < 12:
        h += 12
    elif is_am and h == 12:
        h = 0

    return time(h, m)


def format_time(t: time) -> str:
    return f"{t.hour:02d}:{t.minute:02d}"


def parse_date(s: str) -> date:
    """Parse date string YYYY-MM-DD."""
    parts = s.strip().split("-")
    return date(int(parts[0]), int(parts[1]), int(parts[2]))


def parse_month_day(s: str) -> tuple[int, int]:
    """Parse 'MM-DD' or 'M/D' into (month, day)."""
    parts = s.strip().replace("/", "-").split("-")
    month, day = int(parts[0]), int(parts[1])
    # Leap year so 02-29 is accepted
    date(2000, month, day)
    return month, day


def league_day_from_name(name: str, markers: list[str]) -> DayOfWeek:
    """Saturday if the league name carries a Saturday marker, else Sunday."""
    if any(m in name for m in markers):
        return DayOfWeek.Sat
    return DayOfWeek.Sun


def make_leagues(mapping: dict,
                 saturday_markers: list[str] | None = None) -> dict[str, League]:
    """Build leagues from name -> [teams] or name -> {teams, day}.

    Without an explicit day the league's name decides it.
    """
    if saturday_markers is None:
        saturday_markers = DEFAULT_SATURDAY_MARKERS

    leagues: dict[str, League] = {}
    for name, ldata in mapping.items():
        name = str(name)
        day_val = None
        if isinstance(ldata, dict):
            teams_val = ldata.get("teams") or []
            day_val = ldata.get("day")
        else:
            teams_val = ldata or []
        if day_val:
            day = DayOfWeek.from_str(str(day_val))
        else:
            day = league_day_from_name(name, saturday_markers)
        leagues[name] = League(name=name, teams=[str(t) for t in teams_val],
                               day=day)
    return leagues


def _parse_time_list(values, default: tuple[time, ...]) -> tuple[time, ...]:
    if values is None:
        return default
    return tuple(parse_time(str(v)) for v in values)


def load_config(path: str | Path) -> dict:
    """Load and validate config YAML, returning structured data.

    Returns dict with:
    - season: {name, base_date, game_code_prefix, saturday_markers}
    - time_slots: TimeSlots
    - summer_window: SummerWindow
    - round_policy: RoundPolicy
    - stadiums: [names]
    - reduced_stadium: name or None
    - leagues: dict[name -> League]
    - fix_types: dict[team -> FixType]

    Raises ConfigError listing every hard error found; soft issues are
    printed as warnings.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    errors = []
    warnings = []

    # Season
    season_raw = raw.get("season") or {}
    base_date = None
    if "base_date" not in season_raw:
        errors.append("season.base_date is required")
    else:
        try:
            base_date = parse_date(str(season_raw["base_date"]))
        except (ValueError, IndexError):
            errors.append(f"Invalid season.base_date: {season_raw['base_date']!r}")
    markers = [str(m) for m in season_raw.get("saturday_markers",
                                               DEFAULT_SATURDAY_MARKERS)]
    season = {
        "name": season_raw.get("name", ""),
        "base_date": base_date,
        "game_code_prefix": season_raw.get("game_code_prefix", "G"),
        "saturday_markers": markers,
    }

    # Time slots
    ts_raw = raw.get("time_slots") or {}
    time_slots = TimeSlots()
    try:
        time_slots = TimeSlots(
            standard=_parse_time_list(ts_raw.get("standard"),
                                      time_slots.standard),
            summer=_parse_time_list(ts_raw.get("summer"), time_slots.summer),
        )
    except ValueError as e:
        errors.append(f"Invalid time_slots entry: {e}")
    if not time_slots.standard:
        errors.append("time_slots.standard must not be empty")

    # Summer window
    sw_raw = raw.get("summer_window") or {}
    summer_window = SummerWindow()
    try:
        start = (summer_window.start_month, summer_window.start_day)
        end = (summer_window.end_month, summer_window.end_day)
        if "start" in sw_raw:
            start = parse_month_day(str(sw_raw["start"]))
        if "end" in sw_raw:
            end = parse_month_day(str(sw_raw["end"]))
        summer_window = SummerWindow(start[0], start[1], end[0], end[1])
    except (ValueError, IndexError):
        errors.append(f"Invalid summer_window: {sw_raw!r}")

    # Round policy
    rp_raw = raw.get("round_policy") or {}
    fixed_raw = rp_raw.get("fixed") or {}
    fixed_rounds = 20
    try:
        fixed_rounds = int(fixed_raw.get("rounds", 20))
    except (TypeError, ValueError):
        errors.append(f"Invalid round_policy.fixed.rounds: "
                      f"{fixed_raw.get('rounds')!r}")
    round_policy = RoundPolicy(
        triple_leagues=frozenset(str(n) for n in rp_raw.get("triple", [])),
        fixed_leagues=frozenset(str(n) for n in fixed_raw.get("leagues", [])),
        fixed_rounds=fixed_rounds,
    )
    overlap = round_policy.triple_leagues & round_policy.fixed_leagues
    if overlap:
        errors.append(
            f"Leagues in both triple and fixed round policy: "
            f"{', '.join(sorted(overlap))}"
        )

    # Stadiums
    stadiums = [str(s) for s in raw.get("stadiums", [])]
    if not stadiums:
        errors.append("At least one stadium is required")
    seen = set()
    for s in stadiums:
        if s in seen:
            errors.append(f"Stadium {s} listed more than once")
        seen.add(s)
    reduced_stadium = raw.get("reduced_stadium")
    if reduced_stadium is not None:
        reduced_stadium = str(reduced_stadium)
        if reduced_stadium not in stadiums:
            warnings.append(
                f"Reduced stadium {reduced_stadium} is not in stadiums"
            )

    # Leagues
    leagues_raw = raw.get("leagues") or {}
    if not leagues_raw:
        errors.append("At least one league is required")
    leagues: dict[str, League] = {}
    try:
        leagues = make_leagues(leagues_raw, markers)
    except KeyError as e:
        errors.append(f"Invalid league day: {e}")

    team_to_leagues: dict[str, list[str]] = {}
    for name, league in leagues.items():
        if league.day not in (DayOfWeek.Sat, DayOfWeek.Sun):
            errors.append(f"League {name} plays on {league.day.name}, "
                          f"expected Sat or Sun")
        seen_teams = set()
        for t in league.teams:
            if t in seen_teams:
                errors.append(f"Team {t} listed twice in league {name}")
                continue
            seen_teams.add(t)
            team_to_leagues.setdefault(t, []).append(name)
        if not league.teams:
            warnings.append(f"League {name} has no teams")

    for t, names in team_to_leagues.items():
        if len(names) > 1:
            warnings.append(
                f"Team name {t} appears in leagues {', '.join(sorted(names))}"
            )

    for name in round_policy.triple_leagues | round_policy.fixed_leagues:
        if name not in leagues:
            warnings.append(f"Round policy names unknown league {name}")

    # Fixed teams
    fixed_teams_raw = raw.get("fixed_teams") or {}
    first = [str(t) for t in fixed_teams_raw.get("first") or []]
    last = [str(t) for t in fixed_teams_raw.get("last") or []]
    fix_types: dict[str, FixType] = {}
    try:
        fix_types = fix_types_from_sets(first, last)
    except ValueError as e:
        errors.append(str(e))
    for t in sorted(set(first) | set(last)):
        if t not in team_to_leagues:
            warnings.append(f"Fixed team {t} is not in any league")

    for w in warnings:
        print(f"Warning: {w}")
    if errors:
        raise ConfigError(errors)

    return {
        "season": season,
        "time_slots": time_slots,
        "summer_window": summer_window,
        "round_policy": round_policy,
        "stadiums": stadiums,
        "reduced_stadium": reduced_stadium,
        "leagues": leagues,
        "fix_types": fix_types,
    }


def config_to_raw(config: dict) -> dict:
    """Inverse of load_config: plain YAML-ready data."""
    season = config["season"]
    time_slots = config.get("time_slots") or TimeSlots()
    window = config.get("summer_window") or SummerWindow()
    policy = config.get("round_policy") or RoundPolicy()
    fix_types = config.get("fix_types") or {}

    return {
        "season": {
            "name": season.get("name", ""),
            "base_date": season["base_date"].isoformat(),
            "game_code_prefix": season.get("game_code_prefix", "G"),
            "saturday_markers": list(season.get("saturday_markers",
                                                DEFAULT_SATURDAY_MARKERS)),
        },
        "time_slots": {
            "standard": [format_time(t) for t in time_slots.standard],
            "summer": [format_time(t) for t in time_slots.summer],
        },
        "summer_window": {
            "start": f"{window.start_month:02d}-{window.start_day:02d}",
            "end": f"{window.end_month:02d}-{window.end_day:02d}",
        },
        "round_policy": {
            "triple": sorted(policy.triple_leagues),
            "fixed": {
                "rounds": policy.fixed_rounds,
                "leagues": sorted(policy.fixed_leagues),
            },
        },
        "stadiums": list(config["stadiums"]),
        "reduced_stadium": config.get("reduced_stadium"),
        "leagues": {
            name: {"day": league.day.name, "teams": list(league.teams)}
            for name, league in config["leagues"].items()
        },
        "fixed_teams": {
            "first": sorted(t for t, f in fix_types.items()
                            if f == FixType.FIRST),
            "last": sorted(t for t, f in fix_types.items()
                           if f == FixType.LAST),
        },
    }


def save_config(config: dict, path: str | Path):
    """Write a config dict back to YAML in the shape load_config reads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config_to_raw(config), f, allow_unicode=True,
                       sort_keys=False)


# ---------------------------------------------------------------------------
# Team management: edits keep the fixed-team mapping in step with leagues
# ---------------------------------------------------------------------------

def add_team(config: dict, league_name: str, team: str) -> bool:
    """Append a team to a league. Returns False for blank or duplicate names."""
    team = team.strip()
    league = config["leagues"][league_name]
    if not team or team in league.teams:
        return False
    league.teams.append(team)
    return True


def rename_team(config: dict, league_name: str, old: str, new: str) -> bool:
    """Rename a team in place, carrying over its fixed-slot constraint."""
    new = new.strip()
    league = config["leagues"][league_name]
    if not new or new == old or old not in league.teams or new in league.teams:
        return False
    league.teams = [new if t == old else t for t in league.teams]
    fix_types = config["fix_types"]
    if old in fix_types:
        fix_types[new] = fix_types.pop(old)
    return True


def remove_team(config: dict, league_name: str, team: str) -> bool:
    """Remove a team from a league and drop its fixed-slot constraint."""
    league = config["leagues"][league_name]
    if team not in league.teams:
        return False
    league.teams = [t for t in league.teams if t != team]
    config["fix_types"].pop(team, None)
    return True


def set_fix_type(config: dict, team: str, fix: FixType):
    """Set a team's constraint. FixType.NONE clears it.

    Setting first replaces last and vice versa, since a team holds one.
    """
    if fix == FixType.NONE:
        config["fix_types"].pop(team, None)
    else:
        config["fix_types"][team] = fix


def toggle_fix_type(config: dict, team: str, fix: FixType) -> FixType:
    """Toggle a team's first/last constraint; returns the resulting value."""
    current = config["fix_types"].get(team, FixType.NONE)
    new = FixType.NONE if current == fix else fix
    set_fix_type(config, team, new)
    return new
