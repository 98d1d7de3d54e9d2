"""CLI command for route safety scoring."""

import json
import sys
from pathlib import Path

from ..core import Config, load_gpx_route
from ..reports import attach_reports_to_segments, load_reports_csv
from ..safety import (
    InvalidInputError,
    RouteSafetyScorer,
    ScoringCriteria,
    load_segments,
    split_route,
)

LEVEL_ICONS = {
    "high": "🔴",
    "medium": "🟡",
    "low": "🟢",
}


def run_score(args):
    """Execute route scoring command."""
    try:
        config = Config(args.config) if args.config else Config()
        criteria = ScoringCriteria.from_yaml(args.criteria_config)

        print("=" * 70)
        print("🚸 SCHOOL ROUTE SAFETY SCORE")
        print("=" * 70)

        # 1. Assemble segments
        if args.segments:
            print(f"Segments: {args.segments}")
            segments = load_segments(args.segments)
        else:
            segment_length = args.segment_length or config.get_segment_length()
            print(f"Route: {args.gpx}")
            print(f"Segment length: {segment_length} m")
            segments = split_route(load_gpx_route(args.gpx), segment_length)
        print(f"✓ {len(segments)} segments")

        # 2. Attach hazard reports
        if args.reports:
            reports = load_reports_csv(args.reports)
            segments = attach_reports_to_segments(segments, reports, args.buffer)
            attached = sum(len(s.danger_reports) for s in segments)
            print(f"✓ {attached} report(s) within {args.buffer:g} m of the route")

        print(f"Time of day: {args.time_of_day}")

        # 3. Score
        scorer = RouteSafetyScorer(criteria)
        result = scorer.score_route(segments, args.time_of_day)

        high_threshold = criteria.danger_thresholds['high']
        icon = LEVEL_ICONS.get(result.danger_level.value, "")

        print("\n" + "=" * 70)
        print("📊 RESULTS")
        print("=" * 70)
        print(f"Overall score: {result.overall_score}/100 "
              f"{icon} {result.danger_level.value}")
        print(f"\n{'Segment':<12}{'Score':>6}{'Traffic':>9}{'Restr.':>8}"
              f"{'Reports':>9}{'Infra':>7}")
        for seg in result.segment_scores:
            marker = " ⚠️" if seg.score >= high_threshold else ""
            print(f"{seg.segment_id:<12}{seg.score:>6}"
                  f"{seg.factors.traffic_volume:>9}{seg.factors.restrictions:>8}"
                  f"{seg.factors.user_reports:>9}{seg.factors.infrastructure:>7}"
                  f"{marker}")

        print("\n" + "=" * 70)
        print("💡 RECOMMENDATIONS")
        print("=" * 70)
        for i, text in enumerate(result.recommendations, start=1):
            print(f"{i}. {text}")

        if args.output:
            output = Path(args.output)
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w", encoding="utf-8") as f:
                json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
            print(f"\n✅ Result saved to: {output}")

        return 0

    except FileNotFoundError as e:
        print(f"\n❌ Error: File not found: {e}", file=sys.stderr)
        return 1
    except InvalidInputError as e:
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"\n❌ Error: Invalid input: {e}", file=sys.stderr)
        return 1
