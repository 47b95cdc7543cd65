"""Command-line access to solar event times and DMS conversion.

Usage::

    suntime sun --lat 38.85563244 --lon -90.85866 --date 2025-01-07 --tz -6
    suntime events --lat 51.5074 --lon -0.1278 --date 2025-06-21
    suntime dms-parse "38° 51' 31.44\\" N"
    suntime dms-format -90.85866 --longitude
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, date, datetime
from typing import Dict, List, Optional

from suntime.config import load_settings
from suntime.dms import decimal_to_dms, dms_to_decimal, format_dms, parse_dms
from suntime.julian import apply_utc_offset, to_julian_day
from suntime.solar import TWILIGHT_ANGLES, GeoCoordinate, compute_sun_times, day_events

LOGGER = logging.getLogger("suntime-cli")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _render(value: Optional[datetime], tz: Optional[float]) -> Optional[str]:
    if value is None:
        return None
    if tz is not None:
        return apply_utc_offset(value, tz).isoformat()
    return value.isoformat().replace("+00:00", "Z")


def _build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(prog="suntime", description=__doc__.splitlines()[0])
    commands = parser.add_subparsers(dest="command", required=True)

    def add_location(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("--lat", type=float, required=True, help="latitude, north positive")
        sub.add_argument("--lon", type=float, required=True, help="longitude, east positive")
        sub.add_argument("--date", type=_parse_date, default=None, help="YYYY-MM-DD (UTC date)")
        sub.add_argument("--tz", type=float, default=None, help="time zone offset from UTC in hours")

    sun = commands.add_parser("sun", help="rising and setting time of one twilight tier")
    add_location(sun)
    sun.add_argument(
        "--twilight",
        choices=sorted(TWILIGHT_ANGLES),
        default=settings.default_twilight,
    )

    events = commands.add_parser("events", help="every twilight tier plus solar noon")
    add_location(events)

    dms_parse = commands.add_parser("dms-parse", help="convert DMS text to decimal degrees")
    dms_parse.add_argument("text")

    dms_format = commands.add_parser("dms-format", help="convert decimal degrees to DMS")
    dms_format.add_argument("value", type=float)
    dms_format.add_argument(
        "--longitude", action="store_true", help="treat the value as a longitude (E/W)"
    )
    return parser


def _run(ns: argparse.Namespace) -> Dict[str, object]:
    if ns.command == "sun":
        day = ns.date or datetime.now(UTC).date()
        result = compute_sun_times(day, ns.lat, ns.lon, ns.twilight)
        return {
            "date": day.isoformat(),
            "twilight": ns.twilight,
            "status": result["status"],
            "sunrise": _render(result["sunrise"], ns.tz),
            "sunset": _render(result["sunset"], ns.tz),
            "solar_noon": _render(result["solar_noon"], ns.tz),
        }
    if ns.command == "events":
        day = ns.date or datetime.now(UTC).date()
        coord = GeoCoordinate(latitude=ns.lat, longitude=ns.lon)
        events = day_events(to_julian_day(day), coord)
        return {"date": day.isoformat(), **{k: _render(v, ns.tz) for k, v in events.items()}}
    if ns.command == "dms-parse":
        dms, direction = parse_dms(ns.text)
        return {
            "degrees": dms.degrees,
            "minutes": dms.minutes,
            "seconds": dms.seconds,
            "direction": direction.value,
            "decimal": dms_to_decimal(dms, direction),
        }
    dms, direction = decimal_to_dms(ns.value, not ns.longitude)
    return {
        "degrees": dms.degrees,
        "minutes": dms.minutes,
        "seconds": dms.seconds,
        "direction": direction.value,
        "text": format_dms(dms, direction),
    }


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    ns = parser.parse_args(argv)
    try:
        output = _run(ns)
    except ValueError as exc:
        LOGGER.debug(json.dumps({"event": "cli_error", "command": ns.command, "error": str(exc)}))
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(output, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
