"""CLI entry point for prayer-time computation.

Usage:
    salahtimes --lat 51.5074 --lon -0.1278
    salahtimes --lat 21.3891 --lon 39.8579 --date 2024-03-20 --method 4 --json
    salahtimes --lat 40.7128 --lon -74.0060 --timezone America/New_York --chart day.png
    salahtimes --list-methods
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from salahtimes.compute import run  # noqa: E402
from salahtimes.errors import PrayerTimeError  # noqa: E402
from salahtimes.methods import list_methods  # noqa: E402
from salahtimes.models import PrayerQuery  # noqa: E402
from salahtimes.renderers.payload import error_payload, success_payload  # noqa: E402
from salahtimes.renderers.text import render_table  # noqa: E402


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salahtimes",
        description="Compute daily prayer times and the Qibla bearing.",
    )
    parser.add_argument("--lat", type=float, help="Latitude in decimal degrees")
    parser.add_argument("--lon", type=float, help="Longitude in decimal degrees")
    parser.add_argument("--date", help="Date as YYYY-MM-DD (default: today)")
    parser.add_argument("--method", type=int, help="Calculation method id")
    parser.add_argument("--timezone", help="IANA timezone (default: from coordinate)")
    parser.add_argument("--json", action="store_true", help="Print a JSON payload")
    parser.add_argument("--chart", type=Path, help="Also save a sun-altitude PNG here")
    parser.add_argument(
        "--list-methods", action="store_true", help="List calculation methods and exit"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI. Returns the process exit status.

    Exit status: 0 on success, 2 for rejected input, 1 when no schedule exists.
    """
    logging.basicConfig(
        level=os.environ.get("SALAHTIMES_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_methods:
        for method in list_methods():
            if method.isha_angle_deg is not None:
                isha = f"isha {method.isha_angle_deg}°"
            else:
                isha = f"isha +{method.isha_offset_minutes:g} min"
            print(
                f"{method.id:>3}  {method.name}  "
                f"(fajr {method.fajr_angle_deg}°, {isha}, asr x{method.asr_shadow_factor:g})"
            )
        return 0

    if args.lat is None or args.lon is None:
        parser.error("--lat and --lon are required")

    query = PrayerQuery(
        latitude=args.lat,
        longitude=args.lon,
        date=args.date,
        method_id=args.method,
        timezone=args.timezone,
    )
    try:
        result = run(query)
    except PrayerTimeError as e:
        if args.json:
            print(json.dumps(error_payload(e), ensure_ascii=False, indent=2))
        else:
            print(f"{e.kind.value}: {e.message}", file=sys.stderr)
        return 2 if e.kind.is_input_error else 1

    if args.json:
        print(json.dumps(success_payload(result), ensure_ascii=False, indent=2))
    else:
        print(render_table(result))

    if args.chart is not None:
        from salahtimes.renderers.static import save_day_chart

        path = save_day_chart(result, args.chart)
        print(f"Saved: {path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
