"""CLI command for fetching open traffic data."""

import json
import sys
from pathlib import Path

from ..core import Config
from ..xroad import XRoadAPIError, XRoadClient, describe_error


def run_traffic(args):
    """Fetch traffic measurements around a point and summarise them."""
    try:
        config = Config(args.config) if args.config else Config()
    except (FileNotFoundError, ValueError) as e:
        print(f"\n❌ Error loading config: {e}", file=sys.stderr)
        return 1
    settings = config.get_xroad_settings()

    client = XRoadClient(
        base_url=settings["base_url"],
        timeout=settings["timeout"],
    )

    try:
        data = client.get_road_data(
            args.lat,
            args.lon,
            radius=args.radius,
            date_time=args.date_time,
            road_type=args.road_type,
        )
    except ValueError as e:
        print(f"\n❌ Error: Invalid input: {e}", file=sys.stderr)
        return 1
    except XRoadAPIError as e:
        print(f"\n❌ Error: {describe_error(e)}", file=sys.stderr)
        return 1

    features = data.get("features", []) if isinstance(data, dict) else []
    print(f"✓ Received {len(features)} measurement feature(s)")

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        print(f"✅ Saved to: {output}")
    else:
        print(json.dumps(data, ensure_ascii=False, indent=2))

    return 0
