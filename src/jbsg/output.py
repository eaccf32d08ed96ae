"""Output formatters for the league slot scheduler."""

import csv
from datetime import date
from html import escape
from io import StringIO
from pathlib import Path

from jbsg.config import format_time
from jbsg.models import FixType, Match, UnscheduledPair

EXPORT_HEADER = ["No", "Date", "Day", "Time", "League", "Stadium", "Home",
                 "Away"]


def filter_matches(matches: list[Match], league: str | None = None,
                   stadium: str | None = None, team: str | None = None,
                   month: int | None = None) -> list[Match]:
    """Matches passing every given filter; None means no filter.

    A team filter matches the team on either side.
    """
    return [
        m for m in matches
        if (league is None or m.league == league)
        and (stadium is None or m.stadium == stadium)
        and (team is None or m.involves(team))
        and (month is None or m.month == month)
    ]


def filter_label(league: str | None = None, stadium: str | None = None,
                 team: str | None = None, month: int | None = None) -> str:
    """Short description of active filters, e.g. '[Sat-2, 5월]'."""
    parts = []
    if league is not None:
        parts.append(league)
    if month is not None:
        parts.append(f"{month}월")
    if stadium is not None:
        parts.append(stadium)
    if team is not None:
        parts.append(team)
    if not parts:
        return ""
    return f"[{', '.join(parts)}]"


def _marks(m: Match) -> str:
    if m.is_concession:
        return "<>"
    if m.fix_type == FixType.FIRST:
        return "F"
    if m.fix_type == FixType.LAST:
        return "L"
    return ""


def format_schedule(matches: list[Match],
                    unscheduled: list[UnscheduledPair] | None = None,
                    title: str = "SEASON SCHEDULE") -> str:
    """Format schedule as human-readable text, organized by date."""
    lines = []
    lines.append("=" * 80)
    lines.append(title)
    lines.append("=" * 80)

    by_date: dict[date, list[Match]] = {}
    for m in matches:
        by_date.setdefault(m.date, []).append(m)

    for d in sorted(by_date):
        lines.append(f"\n--- {d.isoformat()} ({by_date[d][0].day_name}) ---")
        for m in sorted(by_date[d], key=lambda x: x.slot_index):
            sun = "*" if m.is_summer_time else " "
            lines.append(
                f"  {format_time(m.start_time)}{sun} {m.stadium:<6} "
                f"{m.league:<8} {m.home:>14} vs {m.away:<14} {_marks(m)}"
            )

    if unscheduled:
        lines.append(f"\n{'=' * 80}")
        lines.append(f"UNSCHEDULED MATCHES ({len(unscheduled)})")
        lines.append("=" * 80)
        for u in unscheduled:
            p = u.pair
            lines.append(f"  {u.date.isoformat()} {p.league:<8} "
                         f"{p.home} vs {p.away}")

    return "\n".join(lines)


def export_rows(matches: list[Match]) -> list[list[str]]:
    """Spreadsheet rows (without header), numbered from 1."""
    return [
        [str(i), m.date_key, m.day_name, format_time(m.start_time), m.league,
         m.stadium, m.home, m.away]
        for i, m in enumerate(matches, 1)
    ]


def format_csv(matches: list[Match]) -> str:
    """Format schedule as spreadsheet-compatible CSV."""
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_HEADER)
    writer.writerows(export_rows(matches))
    return output.getvalue()


HTML_TEMPLATE = """\
<html xmlns:o="urn:schemas-microsoft-com:office:office" \
xmlns:x="urn:schemas-microsoft-com:office:excel" \
xmlns="http://www.w3.org/TR/REC-html40">
<head>
<meta charset="UTF-8">
<style>
table {{ border-collapse: collapse; table-layout: fixed; width: 550pt; }}
.title-row {{ font-size: 18pt; font-weight: bold; height: 45pt; \
text-align: center; vertical-align: middle; }}
th {{ background: #1e293b; color: #ffffff; border: 1px solid #000000; \
padding: 10px 5px; font-weight: bold; }}
td {{ border: 1px solid #000000; text-align: center; padding: 8px 4px; \
font-size: 9pt; height: 25pt; }}
</style>
</head>
<body>
<table>
<thead>
<tr><th colspan="{colspan}" class="title-row">{title}</th></tr>
<tr>{header}</tr>
</thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
"""


def format_html_table(matches: list[Match], title: str) -> str:
    """Format schedule as an HTML table that spreadsheet apps open as a sheet."""
    header = "".join(f"<th>{escape(h)}</th>" for h in EXPORT_HEADER)
    rows = []
    for row in export_rows(matches):
        cells = [f"<td>{escape(v)}</td>" for v in row]
        # Home right-aligned, away left-aligned around the fixture
        cells[6] = f'<td style="text-align: right;">{escape(row[6])}</td>'
        cells[7] = f'<td style="text-align: left;">{escape(row[7])}</td>'
        rows.append("<tr>" + "".join(cells) + "</tr>")
    return HTML_TEMPLATE.format(
        colspan=len(EXPORT_HEADER),
        title=escape(title),
        header=header,
        rows="\n".join(rows),
    )


def write_schedule(matches: list[Match],
                   unscheduled: list[UnscheduledPair] | None = None,
                   output_prefix: str = "output",
                   title: str = "SEASON SCHEDULE"):
    """Write all output files into {output_prefix}/ directory."""
    out_dir = Path(output_prefix)
    out_dir.mkdir(parents=True, exist_ok=True)

    schedule_path = out_dir / "schedule.txt"
    schedule_path.write_text(format_schedule(matches, unscheduled, title),
                             encoding="utf-8")
    print(f"Written: {schedule_path}")

    # utf-8-sig so spreadsheet apps detect the encoding of Korean names
    csv_path = out_dir / "schedule.csv"
    csv_path.write_text(format_csv(matches), encoding="utf-8-sig")
    print(f"Written: {csv_path}")

    html_path = out_dir / "schedule.xls.html"
    html_path.write_text(format_html_table(matches, title), encoding="utf-8")
    print(f"Written: {html_path}")
