"""Tests for models.py: data classes and enums."""

from datetime import date, time

import pytest

from jbsg.models import (
    DayOfWeek, FixType, League, Match, Pair, RoundPolicy, ScheduleResult,
    SummerWindow, TimeSlots, UnscheduledPair, fix_types_from_sets,
)


class TestDayOfWeek:
    def test_from_str_full(self):
        assert DayOfWeek.from_str("Saturday") == DayOfWeek.Sat
        assert DayOfWeek.from_str("Sunday") == DayOfWeek.Sun

    def test_from_str_case_insensitive(self):
        assert DayOfWeek.from_str("sat") == DayOfWeek.Sat
        assert DayOfWeek.from_str("SUN") == DayOfWeek.Sun

    def test_from_str_unknown(self):
        with pytest.raises(KeyError):
            DayOfWeek.from_str("Someday")

    def test_is_weekend(self):
        for d in [DayOfWeek.Sat, DayOfWeek.Sun]:
            assert d.is_weekend()
            assert not d.is_weekday()


class TestFixTypes:
    def test_from_sets(self):
        fix_types = fix_types_from_sets({"A"}, ["B", "C"])
        assert fix_types == {
            "A": FixType.FIRST, "B": FixType.LAST, "C": FixType.LAST,
        }

    def test_empty(self):
        assert fix_types_from_sets([], []) == {}

    def test_overlap_rejected(self):
        with pytest.raises(ValueError, match="A"):
            fix_types_from_sets(["A", "B"], ["A"])


class TestLeague:
    def test_default_day_is_saturday(self):
        league = League("L", ["A", "B"])
        assert league.is_saturday

    def test_sunday(self):
        league = League("L", ["A", "B"], day=DayOfWeek.Sun)
        assert not league.is_saturday


class TestRoundPolicy:
    def test_double_by_default(self):
        policy = RoundPolicy()
        assert policy.total_rounds("any", 4) == 6
        assert policy.total_rounds("any", 12) == 22

    def test_triple(self):
        policy = RoundPolicy(triple_leagues=frozenset({"T"}))
        assert policy.total_rounds("T", 8) == 21
        assert policy.total_rounds("other", 8) == 14

    def test_fixed(self):
        policy = RoundPolicy(fixed_leagues=frozenset({"F"}), fixed_rounds=20)
        assert policy.total_rounds("F", 10) == 20
        assert policy.total_rounds("F", 4) == 20


class TestDefaults:
    def test_time_slots(self):
        ts = TimeSlots()
        assert ts.standard == (time(9, 0), time(11, 0), time(13, 0),
                               time(15, 0))
        assert len(ts.summer) == 5
        assert ts.summer[0] == time(8, 0)
        assert ts.summer[-1] == time(16, 0)

    def test_summer_window(self):
        w = SummerWindow()
        assert (w.start_month, w.start_day) == (3, 20)
        assert (w.end_month, w.end_day) == (9, 15)


class TestPair:
    def test_involves(self):
        p = Pair("A", "B", "L")
        assert p.involves("A")
        assert p.involves("B")
        assert not p.involves("C")

    def test_opponent(self):
        p = Pair("A", "B", "L")
        assert p.opponent("A") == "B"
        assert p.opponent("B") == "A"


class TestScheduleResult:
    def _match(self, d, slot_index=0):
        return Match(home="A", away="B", league="L", date=d, day_name="Sat",
                     stadium="S1", start_time=time(9, 0),
                     slot_index=slot_index)

    def test_empty(self):
        result = ScheduleResult()
        assert result.matches == []
        assert result.fully_scheduled
        assert result.dates == []

    def test_dates_and_matches_on(self):
        d1, d2 = date(2026, 3, 21), date(2026, 3, 28)
        result = ScheduleResult(matches=[self._match(d2), self._match(d1)])
        assert result.dates == [d1, d2]
        assert len(result.matches_on(d1)) == 1
        assert result.matches_on(date(2026, 4, 4)) == []

    def test_unscheduled(self):
        d = date(2026, 3, 21)
        result = ScheduleResult(
            unscheduled=[UnscheduledPair(Pair("A", "B", "L"), d)]
        )
        assert not result.fully_scheduled

    def test_match_properties(self):
        m = self._match(date(2026, 5, 9))
        assert m.month == 5
        assert m.date_key == "2026-05-09"
        assert m.involves("A")
        assert not m.involves("C")
        assert m.fix_type == FixType.NONE
