"""Main scheduling engine for the league slot scheduler.

Season-wide phases:
1. Circle-method rounds for every league (roundrobin.py)
2. Rounds mapped to dates, all leagues' pairs grouped by date (dates.py)

Then for each date, in ascending order:
3. The day's stadium/time slots (slots.py)
4. Constraint ordering of the day's pairs (ordering.py)
5. Slot assignment: firsts from the front, lasts from the back, normals
   into the remaining gaps from the front

The only state carried between dates is the matchup counter. A pair that
finds no free slot is returned as unscheduled, never dropped.
"""

from datetime import date

from jbsg.dates import group_pairs_by_date, week_index
from jbsg.models import (
    FixType, League, Match, Pair, RoundPolicy, ScheduleResult, Slot,
    SummerWindow, TimeSlots, UnscheduledPair,
)
from jbsg.ordering import (
    MatchupCounter, is_concession, order_day, pair_fix_type,
)
from jbsg.roundrobin import generate_pairings
from jbsg.slots import build_day_slots, is_summer


def assign_slots(slots: list[Slot], firsts: list[Pair], lasts: list[Pair],
                 normals: list[Pair],
                 ) -> tuple[list[tuple[int, Pair]], list[Pair]]:
    """Bind a day's classified pairs to slot indices.

    - firsts, in order, take the lowest indices from 0
    - lasts, in reverse order, take the highest free index searching down
    - normals, in order, take the lowest free index searching up

    Returns (placed, overflow): placed is a list of (slot_index, pair)
    sorted by index; overflow holds the pairs that found no free slot.
    """
    assigned: list[Pair | None] = [None] * len(slots)
    overflow = []

    f_idx = 0
    for p in firsts:
        if f_idx < len(assigned):
            assigned[f_idx] = p
            f_idx += 1
        else:
            overflow.append(p)

    l_idx = len(assigned) - 1
    for p in reversed(lasts):
        while l_idx >= 0 and assigned[l_idx] is not None:
            l_idx -= 1
        if l_idx >= 0:
            assigned[l_idx] = p
        else:
            overflow.append(p)

    n_idx = 0
    for p in normals:
        while n_idx < len(assigned) and assigned[n_idx] is not None:
            n_idx += 1
        if n_idx < len(assigned):
            assigned[n_idx] = p
        else:
            overflow.append(p)

    placed = [(i, p) for i, p in enumerate(assigned) if p is not None]
    return placed, overflow


def build_schedule(
    leagues: dict[str, League],
    stadiums: list[str],
    fix_types: dict[str, FixType] | None,
    base_date: date,
    reduced_stadium: str | None = None,
    time_slots: TimeSlots | None = None,
    summer_window: SummerWindow | None = None,
    round_policy: RoundPolicy | None = None,
) -> ScheduleResult:
    """Generate a complete season schedule.

    ``leagues`` maps league name to League; iteration order decides the
    order pairs enter each date before sorting. The result is a pure
    function of the arguments: the same inputs always give the same
    matches in the same order.
    """
    if fix_types is None:
        fix_types = {}

    # Phase 1: circle-method rounds
    league_rounds = []
    total_pairs = 0
    for league in leagues.values():
        if not league.teams:
            print(f"  Warning: league {league.name} has no teams, skipped")
            continue
        rounds = generate_pairings(league, round_policy)
        league_rounds.append((league, rounds))
        total_pairs += sum(len(r.pairs) for r in rounds)

    print(f"  Generated {total_pairs} pairings across "
          f"{len(league_rounds)} leagues")

    # Phase 2: dates
    by_date = group_pairs_by_date(league_rounds, base_date)

    # Phases 3-5, date by date
    counter = MatchupCounter()
    result = ScheduleResult()
    match_days = 0

    for key in sorted(by_date):
        pairs = by_date[key]
        if not pairs:
            continue
        match_days += 1

        d = date.fromisoformat(key)
        week = week_index(d, base_date)
        summer = is_summer(d.month, d.day, summer_window)
        slots = build_day_slots(d, stadiums, reduced_stadium, time_slots,
                                summer_window)

        order = order_day(pairs, fix_types, counter, week)
        placed, overflow = assign_slots(slots, order.firsts, order.lasts,
                                        order.normals)

        for idx, p in placed:
            slot = slots[idx]
            result.matches.append(Match(
                home=p.home,
                away=p.away,
                league=p.league,
                date=d,
                day_name=leagues[p.league].day.name,
                stadium=slot.stadium,
                start_time=slot.start_time,
                round_number=p.round_number,
                week_number=week,
                slot_index=idx,
                is_summer_time=summer and not slot.reduced,
                is_concession=is_concession(p, fix_types),
                fix_type=pair_fix_type(p, fix_types),
            ))

        for p in overflow:
            result.unscheduled.append(UnscheduledPair(p, d, week))
            print(f"  UNSCHEDULED: {p.home} vs {p.away} ({p.league}) "
                  f"on {key} ({len(pairs)} pairs for {len(slots)} slots)")

    result.matches.sort(key=lambda m: (m.date, m.slot_index))

    print(f"  Calendar: {match_days} match days")
    print(f"  Total matches scheduled: {len(result.matches)}")
    if result.unscheduled:
        print(f"  UNSCHEDULED matches: {len(result.unscheduled)}")
    return result


def schedule(config: dict) -> ScheduleResult:
    """Generate a schedule from a loaded config dict (see config.load_config)."""
    return build_schedule(
        config["leagues"],
        config["stadiums"],
        config["fix_types"],
        config["season"]["base_date"],
        reduced_stadium=config.get("reduced_stadium"),
        time_slots=config.get("time_slots"),
        summer_window=config.get("summer_window"),
        round_policy=config.get("round_policy"),
    )
