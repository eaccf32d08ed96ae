#!/usr/bin/env python3
"""Multi-league round-robin slot scheduler.

    jbsg [config.yaml] [-o DIR] [--league L] [--stadium S] [--team T]
         [--month M]

Generates the season from the YAML config, validates it and writes:
  {DIR}/schedule.txt       - Human-readable schedule by date
  {DIR}/schedule.csv       - Spreadsheet CSV
  {DIR}/schedule.xls.html  - HTML table that opens as a spreadsheet
  {DIR}/stats.txt          - Validation report + statistics

Filters narrow the exported files only; validation and statistics always
cover the whole season.

Examples:
    jbsg                               # default config.yaml
    jbsg --league 토요2부 -o sat2      # one league's matches
    jbsg --team 전주시청 --month 5     # one team in May
"""

import argparse
import sys
from pathlib import Path

from jbsg.config import ConfigError, load_config
from jbsg.constraints import format_validation_report, validate_schedule
from jbsg.output import filter_label, filter_matches, write_schedule
from jbsg.scheduler import schedule
from jbsg.stats import compute_stats, format_stats_report


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Multi-league round-robin slot scheduler",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Exit codes:
  0  Schedule valid
  1  Constraint violations or unscheduled matches, or config error
""",
    )
    parser.add_argument(
        "config", nargs="?", default="config.yaml",
        help="Path to config YAML file (default: config.yaml)"
    )
    parser.add_argument(
        "--output-prefix", "-o", default="output",
        help="Output directory for generated files (default: output/)"
    )
    parser.add_argument("--league", help="Export only this league")
    parser.add_argument("--stadium", help="Export only this stadium")
    parser.add_argument("--team", help="Export only this team's matches")
    parser.add_argument("--month", type=int, choices=range(1, 13),
                        metavar="1-12", help="Export only this month")
    args = parser.parse_args(argv)

    config_path = args.config
    if not Path(config_path).exists():
        print(f"Error: config file {config_path} not found")
        sys.exit(1)

    print(f"Loading config from {config_path}...")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Generating schedule...")
    result = schedule(config)

    if not result.matches:
        print("Error: no matches were scheduled!")
        sys.exit(1)

    # Validate
    print("\nValidating...")
    validation = validate_schedule(result, config["leagues"],
                                   config["fix_types"])
    report = format_validation_report(validation)
    print(report)

    # Stats
    stats = compute_stats(result.matches, config["leagues"],
                          config["stadiums"], config["fix_types"])
    stats_text = format_stats_report(stats)
    print("\n" + stats_text)

    # Write outputs
    filters = dict(league=args.league, stadium=args.stadium, team=args.team,
                   month=args.month)
    matches = filter_matches(result.matches, **filters)
    title = config["season"].get("name") or "SEASON SCHEDULE"
    label = filter_label(**filters)
    if label:
        title = f"{title} {label}"
        print(f"\nFilter {label}: {len(matches)} of "
              f"{len(result.matches)} matches")

    print("\nWriting output files...")
    write_schedule(
        matches,
        result.unscheduled,
        output_prefix=args.output_prefix,
        title=title,
    )

    # Write stats
    stats_path = Path(args.output_prefix) / "stats.txt"
    stats_path.write_text(report + "\n\n" + stats_text, encoding="utf-8")
    print(f"Written: {stats_path}")

    if validation["valid"]:
        print("\nSchedule generated successfully!")
    else:
        print(f"\nSchedule has {len(validation['errors'])} "
              f"constraint violations.")
        print("Review errors above and adjust leagues, stadiums or time slots.")
        sys.exit(1)


if __name__ == "__main__":
    main()
