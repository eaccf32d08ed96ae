"""Constraint-aware ordering of one match day's pairs.

Pairs involving a first-fixed team are pushed to the front of the day and
pairs involving a last-fixed team to the back. A pair with a first-fixed
team on one side and a last-fixed team on the other is a concession match:
it alternates between front and back on successive meetings, driven by a
running count of how often the pair has already met this season.

Among pairs of equal weight, leagues take turns at the front: the offset
of each league in the day's sorted league list is rotated by the season
week number.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from jbsg.models import FixType, Pair

FIRST_WEIGHT = -1000
LAST_WEIGHT = 1000


class MatchupCounter:
    """How many times each pair has been scheduled so far in a pass.

    Keys are unordered and namespaced by league, so same-named teams in
    different leagues never share a count.
    """

    def __init__(self):
        self._counts: dict[tuple[str, str, str], int] = defaultdict(int)

    @staticmethod
    def key(pair: Pair) -> tuple[str, str, str]:
        return (pair.league, min(pair.home, pair.away),
                max(pair.home, pair.away))

    def count(self, pair: Pair) -> int:
        return self._counts.get(self.key(pair), 0)

    def record(self, pair: Pair):
        self._counts[self.key(pair)] += 1

    def __len__(self):
        return len(self._counts)


def has_fix(pair: Pair, fix_types: dict[str, FixType], fix: FixType) -> bool:
    return (fix_types.get(pair.home) == fix
            or fix_types.get(pair.away) == fix)


def is_concession(pair: Pair, fix_types: dict[str, FixType]) -> bool:
    """True if one side must play first and the other must play last."""
    return (has_fix(pair, fix_types, FixType.FIRST)
            and has_fix(pair, fix_types, FixType.LAST))


def pair_fix_type(pair: Pair, fix_types: dict[str, FixType]) -> FixType:
    """Constraint reported for a pair; first wins when both sides are fixed."""
    if has_fix(pair, fix_types, FixType.FIRST):
        return FixType.FIRST
    if has_fix(pair, fix_types, FixType.LAST):
        return FixType.LAST
    return FixType.NONE


def pair_weight(pair: Pair, fix_types: dict[str, FixType], count: int) -> int:
    """Primary sort weight; lower sorts toward the day's earliest slot.

    ``count`` is how many times the pair had met before this date.
    """
    has_first = has_fix(pair, fix_types, FixType.FIRST)
    has_last = has_fix(pair, fix_types, FixType.LAST)
    if has_first and has_last:
        return FIRST_WEIGHT if count % 2 == 0 else LAST_WEIGHT
    if has_first:
        return FIRST_WEIGHT
    if has_last:
        return LAST_WEIGHT
    return 0


def league_rotation_key(league: str, day_leagues: list[str],
                        week: int) -> int:
    """Secondary sort key rotating league priority week by week.

    ``day_leagues`` must be the sorted distinct leagues playing that date.
    """
    return (day_leagues.index(league) + week) % len(day_leagues)


def sort_day_pairs(pairs: list[Pair], fix_types: dict[str, FixType],
                   counter: MatchupCounter, week: int) -> list[Pair]:
    """Stable sort of a day's pairs by (weight, league rotation)."""
    day_leagues = sorted({p.league for p in pairs})
    return sorted(pairs, key=lambda p: (
        pair_weight(p, fix_types, counter.count(p)),
        league_rotation_key(p.league, day_leagues, week),
    ))


def classify_day_pairs(ordered: list[Pair], fix_types: dict[str, FixType],
                       counter: MatchupCounter,
                       ) -> tuple[list[Pair], list[Pair], list[Pair]]:
    """Split sorted pairs into (firsts, lasts, normals).

    Must run after the day's pairs were recorded in ``counter``: a
    concession pair's pre-increment count (count - 1) picks its side.
    """
    firsts = []
    lasts = []
    normals = []
    for p in ordered:
        has_first = has_fix(p, fix_types, FixType.FIRST)
        has_last = has_fix(p, fix_types, FixType.LAST)
        if has_first and has_last:
            if (counter.count(p) - 1) % 2 == 0:
                firsts.append(p)
            else:
                lasts.append(p)
        elif has_first:
            firsts.append(p)
        elif has_last:
            lasts.append(p)
        else:
            normals.append(p)
    return firsts, lasts, normals


@dataclass
class DayOrder:
    """Result of ordering one match day."""
    ordered: list[Pair] = field(default_factory=list)
    firsts: list[Pair] = field(default_factory=list)
    lasts: list[Pair] = field(default_factory=list)
    normals: list[Pair] = field(default_factory=list)


def order_day(pairs: list[Pair], fix_types: dict[str, FixType],
              counter: MatchupCounter, week: int) -> DayOrder:
    """Sort a day's pairs, record them in the counter, then classify them."""
    ordered = sort_day_pairs(pairs, fix_types, counter, week)
    for p in ordered:
        counter.record(p)
    firsts, lasts, normals = classify_day_pairs(ordered, fix_types, counter)
    return DayOrder(ordered=ordered, firsts=firsts, lasts=lasts,
                    normals=normals)
