"""Tests for scheduler.py: slot assignment and season assembly."""

from collections import defaultdict
from datetime import date, time

from jbsg.models import (
    DayOfWeek, FixType, League, Pair, RoundPolicy, Slot, TimeSlots,
)
from jbsg.scheduler import assign_slots, build_schedule
from jbsg.slots import build_day_slots

BASE = date(2026, 3, 21)  # Saturday


def _slots(n):
    return [Slot(f"S{i}", time(9, 0)) for i in range(n)]


def _p(home, away, league="L"):
    return Pair(home, away, league)


def _leagues(*leagues):
    return {lg.name: lg for lg in leagues}


class TestAssignSlots:
    def test_firsts_front_lasts_back_normals_gaps(self):
        f1, l1, l2 = _p("F", "a"), _p("Z", "b"), _p("Y", "c")
        n1, n2 = _p("d", "e"), _p("g", "h")
        placed, overflow = assign_slots(_slots(5), [f1], [l1, l2], [n1, n2])
        assert placed == [(0, f1), (1, n1), (2, n2), (3, l1), (4, l2)]
        assert overflow == []

    def test_normals_skip_filled_slots(self):
        f1, f2, l1 = _p("F", "a"), _p("G", "b"), _p("Z", "c")
        n1 = _p("d", "e")
        placed, overflow = assign_slots(_slots(6), [f1, f2], [l1], [n1])
        assert placed == [(0, f1), (1, f2), (2, n1), (5, l1)]

    def test_overflow_normals(self):
        f1, l1, n1 = _p("F", "a"), _p("Z", "b"), _p("c", "d")
        placed, overflow = assign_slots(_slots(2), [f1], [l1], [n1])
        assert placed == [(0, f1), (1, l1)]
        assert overflow == [n1]

    def test_overflow_firsts_and_lasts(self):
        f1, f2, l1 = _p("F", "a"), _p("G", "b"), _p("Z", "c")
        placed, overflow = assign_slots(_slots(1), [f1, f2], [l1], [])
        assert placed == [(0, f1)]
        assert overflow == [f2, l1]

    def test_no_slots(self):
        n1 = _p("a", "b")
        placed, overflow = assign_slots([], [], [], [n1])
        assert placed == []
        assert overflow == [n1]


class TestBuildSchedule:
    def test_double_round_robin(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        result = build_schedule(leagues, ["S1", "S2"], {}, BASE)
        assert len(result.matches) == 12
        assert result.fully_scheduled
        assert len(result.dates) == 6
        assert result.dates[0] == BASE

    def test_sunday_league(self):
        leagues = _leagues(League("L", ["A", "B"], DayOfWeek.Sun))
        result = build_schedule(leagues, ["S1"], {}, BASE)
        assert [m.date for m in result.matches] == [
            date(2026, 3, 22), date(2026, 3, 29),
        ]
        assert all(m.day_name == "Sun" for m in result.matches)
        assert all(m.week_number == i for i, m in enumerate(result.matches))

    def test_match_fields_from_slot(self):
        leagues = _leagues(League("L", ["A", "B"]))
        result = build_schedule(leagues, ["S1", "R"], {}, BASE,
                                reduced_stadium="R")
        m = result.matches[0]
        assert (m.home, m.away, m.league) == ("A", "B", "L")
        assert m.stadium == "S1"
        assert m.start_time == time(8, 0)
        assert m.slot_index == 0
        assert m.is_summer_time
        assert m.day_name == "Sat"

    def test_reduced_stadium_not_summer_time(self):
        # Two pairs per date, one main stadium: second pair lands on the
        # reduced stadium at a standard time
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        result = build_schedule(leagues, ["S1", "R"], {}, BASE,
                                reduced_stadium="R")
        reduced = [m for m in result.matches if m.stadium == "R"]
        assert reduced
        assert all(not m.is_summer_time for m in reduced)
        assert all(m.start_time == time(9, 0) for m in reduced)

    def test_overflow_surfaced_not_dropped(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        one_time = TimeSlots(standard=(time(9, 0),), summer=(time(9, 0),))
        result = build_schedule(leagues, ["S1"], {}, BASE,
                                time_slots=one_time)
        assert len(result.matches) == 6
        assert len(result.unscheduled) == 6
        assert not result.fully_scheduled
        scheduled = {(m.home, m.away, m.date) for m in result.matches}
        for u in result.unscheduled:
            assert (u.pair.home, u.pair.away, u.date) not in scheduled

    def test_overflow_printed(self, capsys):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        one_time = TimeSlots(standard=(time(9, 0),), summer=(time(9, 0),))
        build_schedule(leagues, ["S1"], {}, BASE, time_slots=one_time)
        out = capsys.readouterr().out
        assert "UNSCHEDULED: B vs C (L) on 2026-03-21" in out
        assert "UNSCHEDULED matches: 6" in out

    def test_empty_league_skipped(self, capsys):
        leagues = _leagues(League("Empty", []), League("L", ["A", "B"]))
        result = build_schedule(leagues, ["S1"], {}, BASE)
        assert len(result.matches) == 2
        assert "league Empty has no teams" in capsys.readouterr().out

    def test_bye_only_dates_skipped(self):
        leagues = _leagues(League("Solo", ["A"]))
        result = build_schedule(leagues, ["S1"], {}, BASE)
        assert result.matches == []
        assert result.fully_scheduled

    def test_first_fixed_team_always_first_slot(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        result = build_schedule(leagues, ["S1", "S2"],
                                {"C": FixType.FIRST}, BASE)
        c_matches = [m for m in result.matches if m.involves("C")]
        assert len(c_matches) == 6
        assert all(m.slot_index == 0 for m in c_matches)
        assert all(m.fix_type == FixType.FIRST for m in c_matches)

    def test_last_fixed_team_always_last_slot(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        result = build_schedule(leagues, ["S1", "S2"],
                                {"B": FixType.LAST}, BASE)
        n_slots = len(build_day_slots(BASE, ["S1", "S2"]))
        b_matches = [m for m in result.matches if m.involves("B")]
        assert all(m.slot_index == n_slots - 1 for m in b_matches)
        assert all(m.start_time == time(16, 0) for m in b_matches)

    def test_concession_alternates_edges(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        fix_types = {"A": FixType.FIRST, "D": FixType.LAST}
        result = build_schedule(leagues, ["S1", "S2"], fix_types, BASE)
        n_slots = len(build_day_slots(BASE, ["S1", "S2"]))
        meetings = [m for m in result.matches
                    if {m.home, m.away} == {"A", "D"}]
        assert [m.slot_index for m in meetings] == [0, n_slots - 1]
        assert all(m.is_concession for m in meetings)

    def test_capacity_bound_per_date(self):
        leagues = _leagues(
            League("L1", [f"a{i}" for i in range(10)]),
            League("L2", [f"b{i}" for i in range(9)]),
        )
        stadiums = ["S1", "S2"]
        result = build_schedule(leagues, stadiums, {}, BASE)
        per_date = defaultdict(int)
        for m in result.matches:
            per_date[m.date] += 1
        for d, count in per_date.items():
            assert count <= len(build_day_slots(d, stadiums))

    def test_matches_sorted_by_date_and_slot(self):
        leagues = _leagues(League("Sat", ["A", "B", "C", "D"]),
                           League("Sun", ["E", "F", "G"], DayOfWeek.Sun))
        result = build_schedule(leagues, ["S1", "S2"], {}, BASE)
        keys = [(m.date, m.slot_index) for m in result.matches]
        assert keys == sorted(keys)

    def test_deterministic(self):
        leagues = _leagues(League("Sat", [f"a{i}" for i in range(7)]),
                           League("Sun", [f"b{i}" for i in range(6)],
                                  DayOfWeek.Sun))
        fix_types = {"a1": FixType.FIRST, "a4": FixType.LAST}
        policy = RoundPolicy(triple_leagues=frozenset({"Sun"}))
        a = build_schedule(leagues, ["S1", "S2"], fix_types, BASE,
                           round_policy=policy)
        b = build_schedule(leagues, ["S1", "S2"], fix_types, BASE,
                           round_policy=policy)
        assert a.matches == b.matches
        assert a.unscheduled == b.unscheduled

    def test_round_policy_applied(self):
        leagues = _leagues(League("L", ["A", "B", "C", "D"]))
        policy = RoundPolicy(fixed_leagues=frozenset({"L"}), fixed_rounds=4)
        result = build_schedule(leagues, ["S1", "S2"], {}, BASE,
                                round_policy=policy)
        assert len(result.dates) == 4
        assert len(result.matches) == 8
