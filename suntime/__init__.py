"""Solar event times and coordinate notation utilities."""

from .dms import (
    DMS,
    Hemisphere,
    InvalidDirectionError,
    ParseFormatError,
    decimal_to_dms,
    dms_to_decimal,
    format_dms,
    parse_dms,
)
from .julian import from_julian_day, to_julian_day
from .solar import (
    TWILIGHT_ANGLES,
    GeoCoordinate,
    SolarAngle,
    SolarEvent,
    UnreachableAngleError,
    compute_sun_times,
    day_events,
    event_time,
    solar_event_time,
    solar_noon,
)

__version__ = "1.0.0"

__all__ = [
    "DMS",
    "GeoCoordinate",
    "Hemisphere",
    "InvalidDirectionError",
    "ParseFormatError",
    "SolarAngle",
    "SolarEvent",
    "TWILIGHT_ANGLES",
    "UnreachableAngleError",
    "compute_sun_times",
    "day_events",
    "decimal_to_dms",
    "dms_to_decimal",
    "event_time",
    "format_dms",
    "from_julian_day",
    "parse_dms",
    "solar_event_time",
    "solar_noon",
    "to_julian_day",
]
