"""CLI command for hazard report statistics."""

import sys

from ..reports import filter_reports, load_reports_csv, report_statistics


def run_report_stats(args):
    """Print report counts by status, danger type and danger level."""
    try:
        reports = load_reports_csv(args.reports)
        reports = filter_reports(
            reports,
            danger_type=args.danger_type,
            danger_level=args.danger_level,
            date_range=args.date_range,
        )
    except FileNotFoundError as e:
        print(f"\n❌ Error: File not found: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"\n❌ Error: Invalid input: {e}", file=sys.stderr)
        return 1

    stats = report_statistics(reports)

    print("=" * 50)
    print(f"📋 HAZARD REPORTS: {stats['total']}")
    print("=" * 50)
    for title, key in (("By status", "status"),
                       ("By danger type", "danger_type"),
                       ("By danger level", "danger_level")):
        print(f"\n{title}:")
        for name, count in stats[key].items():
            print(f"  {name!s:<10} {count:>5}")

    return 0
