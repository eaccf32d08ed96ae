"""Data models for the league slot scheduler."""

from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum


class DayOfWeek(Enum):
    Mon = 0
    Tue = 1
    Wed = 2
    Thu = 3
    Fri = 4
    Sat = 5
    Sun = 6

    @classmethod
    def from_str(cls, s: str) -> "DayOfWeek":
        return cls[s[:3].capitalize()]

    def is_weekday(self) -> bool:
        return self.value < 5

    def is_weekend(self) -> bool:
        return self.value >= 5


class FixType(Enum):
    """Positional constraint on a team's match within its match day."""
    NONE = "none"
    FIRST = "first"
    LAST = "last"


def fix_types_from_sets(first: set[str] | list[str],
                        last: set[str] | list[str]) -> dict[str, FixType]:
    """Build a team -> FixType mapping from first-fixed and last-fixed names.

    A team can only carry one constraint, so overlap is rejected.
    """
    overlap = set(first) & set(last)
    if overlap:
        raise ValueError(
            f"Teams fixed both first and last: {', '.join(sorted(overlap))}"
        )
    fix_types = {t: FixType.FIRST for t in first}
    fix_types.update({t: FixType.LAST for t in last})
    return fix_types


@dataclass
class League:
    """A league: ordered teams playing on one weekend day."""
    name: str
    teams: list[str]
    day: DayOfWeek = DayOfWeek.Sat

    @property
    def is_saturday(self) -> bool:
        return self.day == DayOfWeek.Sat


@dataclass(frozen=True)
class RoundPolicy:
    """How many circle-method rounds each league plays in a season.

    Leagues in ``triple_leagues`` play three full cycles, leagues in
    ``fixed_leagues`` play exactly ``fixed_rounds`` rounds, everyone else
    plays a double round-robin.
    """
    triple_leagues: frozenset[str] = frozenset()
    fixed_leagues: frozenset[str] = frozenset()
    fixed_rounds: int = 20

    def total_rounds(self, league_name: str, n: int) -> int:
        """Rounds for a league whose padded (even) team count is n."""
        if league_name in self.triple_leagues:
            return (n - 1) * 3
        if league_name in self.fixed_leagues:
            return self.fixed_rounds
        return (n - 1) * 2


@dataclass(frozen=True)
class TimeSlots:
    """Start-time catalogues for a match day."""
    standard: tuple[time, ...] = (time(9, 0), time(11, 0), time(13, 0),
                                  time(15, 0))
    summer: tuple[time, ...] = (time(8, 0), time(10, 0), time(12, 0),
                                time(14, 0), time(16, 0))


@dataclass(frozen=True)
class SummerWindow:
    """Calendar window (inclusive month/day bounds) using the summer times."""
    start_month: int = 3
    start_day: int = 20
    end_month: int = 9
    end_day: int = 15


@dataclass(frozen=True)
class Pair:
    """One scheduled meeting of two teams, before it has a slot."""
    home: str
    away: str
    league: str
    round_number: int = 0

    def involves(self, team: str) -> bool:
        return team in (self.home, self.away)

    def opponent(self, team: str) -> str:
        if team == self.home:
            return self.away
        return self.home


@dataclass
class Round:
    """Pairs of one league produced by one circle-method rotation."""
    number: int
    pairs: list[Pair]
    bye_teams: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Slot:
    """A venue/start-time combination available on a match day."""
    stadium: str
    start_time: time
    reduced: bool = False


@dataclass
class Match:
    """A fully scheduled match with date, stadium and start time."""
    home: str
    away: str
    league: str
    date: date
    day_name: str
    stadium: str
    start_time: time
    round_number: int = 0
    week_number: int = 0
    slot_index: int = 0
    is_summer_time: bool = False
    is_concession: bool = False
    fix_type: FixType = FixType.NONE

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    def involves(self, team: str) -> bool:
        return team in (self.home, self.away)


@dataclass
class UnscheduledPair:
    """A pair that found no free slot on its date."""
    pair: Pair
    date: date
    week_number: int = 0


@dataclass
class ScheduleResult:
    """Output of one generation pass."""
    matches: list[Match] = field(default_factory=list)
    unscheduled: list[UnscheduledPair] = field(default_factory=list)

    def matches_on(self, d: date) -> list[Match]:
        return [m for m in self.matches if m.date == d]

    @property
    def dates(self) -> list[date]:
        return sorted({m.date for m in self.matches})

    @property
    def fully_scheduled(self) -> bool:
        return not self.unscheduled
