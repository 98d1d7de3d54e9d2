"""Command-line interface for the school-route safety toolkit."""

import sys
import argparse


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="schoolroute-safety",
        description="Score school routes, quiz hazards and query traffic data"
    )
    parser.add_argument(
        "--config",
        help="Path to settings INI file (default: built-in settings)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Score subcommand
    score_parser = subparsers.add_parser(
        "score",
        help="Compute the safety score of a route"
    )
    source = score_parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--segments",
        help="JSON or GeoJSON file with prepared route segments"
    )
    source.add_argument(
        "--gpx",
        help="GPX walking route (split into segments automatically)"
    )
    score_parser.add_argument(
        "--segment-length",
        type=int,
        help="Segment length in meters when splitting a GPX route "
             "(default: from settings, 200)"
    )
    score_parser.add_argument(
        "--reports",
        help="CSV file of hazard reports to attach to nearby segments"
    )
    score_parser.add_argument(
        "--buffer",
        type=float,
        default=50.0,
        help="Distance in meters within which reports belong to a segment (default: 50)"
    )
    score_parser.add_argument(
        "--time-of-day",
        choices=["morning", "noon", "afternoon"],
        default="morning",
        help="Commute window used to weight traffic (default: morning)"
    )
    score_parser.add_argument(
        "--criteria-config",
        default="config/scoring_criteria.yaml",
        help="Path to scoring criteria YAML (default: config/scoring_criteria.yaml)"
    )
    score_parser.add_argument(
        "--output",
        help="Write the result as JSON to this file"
    )

    # Quiz subcommand
    quiz_parser = subparsers.add_parser(
        "quiz",
        help="Quiz yourself on hazards reported along a route"
    )
    quiz_parser.add_argument(
        "--gpx",
        required=True,
        help="GPX walking route"
    )
    quiz_parser.add_argument(
        "--reports",
        required=True,
        help="CSV file of hazard reports"
    )
    quiz_parser.add_argument(
        "--buffer",
        type=float,
        help="Distance in meters from the route (default: from settings, 50)"
    )
    quiz_parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for the question order"
    )
    quiz_parser.add_argument(
        "--user",
        default="local",
        help="User id credited with the quiz points (default: local)"
    )
    quiz_parser.add_argument(
        "--ledger",
        help="JSON file keeping user points across quizzes (created if missing)"
    )

    # Traffic subcommand
    traffic_parser = subparsers.add_parser(
        "traffic",
        help="Fetch traffic measurements around a point"
    )
    traffic_parser.add_argument("--lat", type=float, required=True, help="Latitude")
    traffic_parser.add_argument("--lon", type=float, required=True, help="Longitude")
    traffic_parser.add_argument(
        "--radius",
        type=int,
        default=1000,
        help="Search radius in meters (default: 1000)"
    )
    traffic_parser.add_argument(
        "--date-time",
        help="YYYYMMDDHHMM (default: now)"
    )
    traffic_parser.add_argument(
        "--road-type",
        default="3",
        help="Road type code (default: 3, national road)"
    )
    traffic_parser.add_argument(
        "--output",
        help="Write the GeoJSON response to this file"
    )

    # Report statistics subcommand
    stats_parser = subparsers.add_parser(
        "report-stats",
        help="Summarise hazard reports by status, type and level"
    )
    stats_parser.add_argument(
        "--reports",
        required=True,
        help="CSV file of hazard reports"
    )
    stats_parser.add_argument(
        "--type",
        dest="danger_type",
        default="all",
        help="Only count this danger type (default: all)"
    )
    stats_parser.add_argument(
        "--level",
        dest="danger_level",
        default="all",
        help="Only count this danger level (default: all)"
    )
    stats_parser.add_argument(
        "--date-range",
        choices=["all", "today", "week", "month"],
        default="all",
        help="Only count recent reports (default: all)"
    )

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Route to appropriate subcommand
    if args.command == "score":
        from .score import run_score
        sys.exit(run_score(args))
    elif args.command == "quiz":
        from .quiz import run_quiz
        sys.exit(run_quiz(args))
    elif args.command == "traffic":
        from .traffic import run_traffic
        sys.exit(run_traffic(args))
    elif args.command == "report-stats":
        from .reports import run_report_stats
        sys.exit(run_report_stats(args))


if __name__ == "__main__":
    main()
