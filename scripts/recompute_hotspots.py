"""
Recompute the panic/case concentration centers once.

Meant for cron or a scheduler so the O(n^2) scan stays off request paths.

Usage:
  python scripts/recompute_hotspots.py
  python scripts/recompute_hotspots.py --panic-radius 300 --case-radius 1000
"""

import argparse
import json
import logging
import sys

from safevoice.services.hotspot_service import HotspotService


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--panic-radius", type=float, default=None, help="Meters (default from settings)")
    parser.add_argument("--case-radius", type=float, default=None, help="Meters (default from settings)")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    for value in (args.panic_radius, args.case_radius):
        if value is not None and value <= 0:
            parser.error("radius must be positive")

    try:
        result = HotspotService().recompute(args.panic_radius, args.case_radius)
    except Exception as e:
        print(f"Hotspot recomputation failed: {e}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
