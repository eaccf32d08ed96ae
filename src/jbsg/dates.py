"""Map league rounds onto calendar dates."""

from datetime import date, timedelta

from jbsg.models import DayOfWeek, League, Pair, Round


def match_date(base_date: date, round_number: int, day: DayOfWeek) -> date:
    """Date on which a league of the given day plays a round.

    Saturday leagues play on the base date's weekday, Sunday leagues the
    day after, one week further per round.
    """
    offset = 0 if day == DayOfWeek.Sat else 1
    return base_date + timedelta(days=round_number * 7 + offset)


def date_key(d: date) -> str:
    """Grouping key for a date: YYYY-MM-DD."""
    return d.isoformat()


def week_index(d: date, base_date: date) -> int:
    """Whole weeks elapsed since the season base date."""
    return (d - base_date).days // 7


def group_pairs_by_date(league_rounds: list[tuple[League, list[Round]]],
                        base_date: date) -> dict[str, list[Pair]]:
    """Group every league's pairs by the date they are played.

    Within a date, pairs keep league order and then round pairing order.
    Rounds whose pairs are all byes still register their date, with an
    empty list, so callers must skip empty groups.
    """
    by_date: dict[str, list[Pair]] = {}
    for league, rounds in league_rounds:
        for rnd in rounds:
            d = match_date(base_date, rnd.number, league.day)
            by_date.setdefault(date_key(d), []).extend(rnd.pairs)
    return by_date
