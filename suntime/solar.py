"""Sunrise, sunset and twilight times from the mean-sun approximation.

Every public angle is in degrees; conversion to radians happens inside the
individual step functions right before the trigonometry. The step functions
are numpy ufunc compositions, so they accept scalars as well as arrays of
Julian days.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

import numpy as np

from .julian import J2000, from_julian_day, julian_day_noon, to_julian_day

__all__ = [
    "EVENT_TABLE",
    "TWILIGHT_ANGLES",
    "GeoCoordinate",
    "SolarAngle",
    "SolarEvent",
    "UnreachableAngleError",
    "compute_sun_times",
    "day_events",
    "event_time",
    "solar_event_series",
    "solar_event_time",
    "solar_noon",
]

LOGGER = logging.getLogger(__name__)

MEAN_ANOMALY_AT_J2000 = 357.5291  # degrees
MEAN_DAILY_MOTION = 0.98560028  # degrees per day
PERIHELION_ARGUMENT = 102.9372  # degrees
OBLIQUITY = 23.44  # degrees
CENTER_COEFFICIENTS = (1.9148, 0.0200, 0.0003)
TRANSIT_ECCENTRICITY = 0.0053  # days
TRANSIT_OBLIQUITY = 0.0069  # days


class SolarAngle(float, Enum):
    """Zenith angle of the sun's centre that defines each event tier."""

    OFFICIAL = 90.833  # refraction plus solar semidiameter
    CIVIL = 96.0
    NAUTICAL = 102.0
    ASTRONOMICAL = 108.0


Angle = Union[SolarAngle, float]


class SolarEvent(str, Enum):
    """Named rising/setting crossings."""

    SUNRISE = "sunrise"
    SUNSET = "sunset"
    CIVIL_TWILIGHT_SUNRISE = "civil_twilight_sunrise"
    CIVIL_TWILIGHT_SUNSET = "civil_twilight_sunset"
    NAUTICAL_TWILIGHT_SUNRISE = "nautical_twilight_sunrise"
    NAUTICAL_TWILIGHT_SUNSET = "nautical_twilight_sunset"
    ASTRONOMICAL_TWILIGHT_SUNRISE = "astronomical_twilight_sunrise"
    ASTRONOMICAL_TWILIGHT_SUNSET = "astronomical_twilight_sunset"


EVENT_TABLE: Dict[SolarEvent, Tuple[SolarAngle, bool]] = {
    SolarEvent.SUNRISE: (SolarAngle.OFFICIAL, True),
    SolarEvent.SUNSET: (SolarAngle.OFFICIAL, False),
    SolarEvent.CIVIL_TWILIGHT_SUNRISE: (SolarAngle.CIVIL, True),
    SolarEvent.CIVIL_TWILIGHT_SUNSET: (SolarAngle.CIVIL, False),
    SolarEvent.NAUTICAL_TWILIGHT_SUNRISE: (SolarAngle.NAUTICAL, True),
    SolarEvent.NAUTICAL_TWILIGHT_SUNSET: (SolarAngle.NAUTICAL, False),
    SolarEvent.ASTRONOMICAL_TWILIGHT_SUNRISE: (SolarAngle.ASTRONOMICAL, True),
    SolarEvent.ASTRONOMICAL_TWILIGHT_SUNSET: (SolarAngle.ASTRONOMICAL, False),
}

TWILIGHT_ANGLES: Dict[str, SolarAngle] = {
    "official": SolarAngle.OFFICIAL,
    "civil": SolarAngle.CIVIL,
    "nautical": SolarAngle.NAUTICAL,
    "astronomical": SolarAngle.ASTRONOMICAL,
}


class UnreachableAngleError(ValueError):
    """Raised when the sun never crosses the requested angle on that day.

    ``cos_hour_angle`` above 1 means the sun stays below the angle all day
    (``polar_night``); below -1 means it stays above it (``polar_day``).
    """

    def __init__(self, cos_hour_angle: float, angle: float, latitude: float) -> None:
        self.cos_hour_angle = float(cos_hour_angle)
        self.angle = float(angle)
        self.latitude = float(latitude)
        super().__init__(
            f"Sun does not cross zenith angle {self.angle:g}° at latitude {self.latitude:g}° "
            f"on this day ({self.status}, cos H = {self.cos_hour_angle:.6f})"
        )

    @property
    def status(self) -> str:
        return "polar_night" if self.cos_hour_angle > 1.0 else "polar_day"


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer position in decimal degrees, north and east positive."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range [-90, 90]: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range [-180, 180]: {self.longitude}")


def mean_solar_noon(day, longitude: float):
    """Days from J2000 to mean solar noon at *longitude* (``J*``).

    *day* is first reduced to noon UTC of its civil date.
    """

    return julian_day_noon(day) - J2000 - longitude / 360.0


def mean_anomaly(jstar):
    """Solar mean anomaly in degrees, normalized to [0, 360)."""

    return np.mod(MEAN_ANOMALY_AT_J2000 + MEAN_DAILY_MOTION * jstar, 360.0)


def equation_of_center(anomaly):
    """Correction from mean to true anomaly, in degrees."""

    m = np.radians(anomaly)
    c1, c2, c3 = CENTER_COEFFICIENTS
    return c1 * np.sin(m) + c2 * np.sin(2.0 * m) + c3 * np.sin(3.0 * m)


def ecliptic_longitude(anomaly):
    """Ecliptic longitude of the sun in degrees, normalized to [0, 360)."""

    return np.mod(
        anomaly + equation_of_center(anomaly) + PERIHELION_ARGUMENT + 180.0, 360.0
    )


def solar_transit(jstar, anomaly, longitude_ecliptic):
    """Julian day of the sun crossing the local meridian."""

    m = np.radians(anomaly)
    lam = np.radians(longitude_ecliptic)
    return (
        J2000
        + jstar
        + TRANSIT_ECCENTRICITY * np.sin(m)
        - TRANSIT_OBLIQUITY * np.sin(2.0 * lam)
    )


def solar_declination(longitude_ecliptic):
    """Declination of the sun in degrees."""

    lam = np.radians(longitude_ecliptic)
    return np.degrees(np.arcsin(np.sin(lam) * np.sin(np.radians(OBLIQUITY))))


def cos_hour_angle(latitude: float, declination, angle: float):
    """Cosine of the hour angle at which the sun reaches zenith *angle*.

    Values outside [-1, 1] mean the angle is never reached.
    """

    phi = np.radians(latitude)
    delta = np.radians(declination)
    return (np.cos(np.radians(angle)) - np.sin(phi) * np.sin(delta)) / (
        np.cos(phi) * np.cos(delta)
    )


def hour_angle(latitude: float, declination: float, angle: float) -> float:
    """Hour angle in degrees for a single date.

    Raises :class:`UnreachableAngleError` instead of clamping when the
    arccosine argument leaves [-1, 1].
    """

    angle = float(angle)
    cosine = float(cos_hour_angle(latitude, declination, angle))
    if not -1.0 <= cosine <= 1.0:
        LOGGER.debug(
            json.dumps(
                {
                    "event": "angle_unreachable",
                    "latitude": latitude,
                    "angle": angle,
                    "cos_hour_angle": cosine,
                }
            )
        )
        raise UnreachableAngleError(cosine, angle, latitude)
    return math.degrees(math.acos(cosine))


def _transit(day: float, coord: GeoCoordinate) -> Tuple[float, float]:
    if not math.isfinite(day):
        raise ValueError(f"Julian day must be finite, got {day!r}")
    jstar = mean_solar_noon(day, coord.longitude)
    anomaly = mean_anomaly(jstar)
    lam = ecliptic_longitude(anomaly)
    return float(solar_transit(jstar, anomaly, lam)), float(solar_declination(lam))


def event_julian_day(
    day: float, coord: GeoCoordinate, angle: Angle, is_rising: bool
) -> float:
    """Julian day of the requested crossing, before rounding to seconds."""

    transit, declination = _transit(day, coord)
    offset = hour_angle(coord.latitude, declination, float(angle)) / 360.0
    return transit - offset if is_rising else transit + offset


def solar_event_time(
    day: float, coord: GeoCoordinate, angle: Angle, is_rising: bool
) -> datetime:
    """UTC instant at which the sun crosses *angle* on the date of *day*.

    Parameters
    ----------
    day:
        Julian day of any instant within the UTC civil date of interest.
    coord:
        Observer position.
    angle:
        Zenith angle in degrees, usually a :class:`SolarAngle`.
    is_rising:
        ``True`` for the morning crossing, ``False`` for the evening one.

    Returns
    -------
    datetime
        Timezone-aware UTC datetime rounded to the whole second.

    Raises
    ------
    UnreachableAngleError
        If the sun never crosses *angle* at that place and date.
    """

    return from_julian_day(event_julian_day(day, coord, angle, is_rising))


def solar_noon(day: float, coord: GeoCoordinate) -> datetime:
    """UTC instant of the solar transit on the date of *day*."""

    transit, _ = _transit(day, coord)
    return from_julian_day(transit)


def event_time(event: Union[SolarEvent, str], day: float, coord: GeoCoordinate) -> datetime:
    """Compute a named event from :data:`EVENT_TABLE`."""

    angle, is_rising = EVENT_TABLE[SolarEvent(event)]
    return solar_event_time(day, coord, angle, is_rising)


def _named_event(event: SolarEvent) -> Callable[[float, GeoCoordinate], datetime]:
    def compute(day: float, coord: GeoCoordinate) -> datetime:
        return event_time(event, day, coord)

    compute.__name__ = compute.__qualname__ = event.value
    compute.__doc__ = f"UTC time of {event.value.replace('_', ' ')} on the date of *day*."
    return compute


sunrise = _named_event(SolarEvent.SUNRISE)
sunset = _named_event(SolarEvent.SUNSET)
civil_twilight_sunrise = _named_event(SolarEvent.CIVIL_TWILIGHT_SUNRISE)
civil_twilight_sunset = _named_event(SolarEvent.CIVIL_TWILIGHT_SUNSET)
nautical_twilight_sunrise = _named_event(SolarEvent.NAUTICAL_TWILIGHT_SUNRISE)
nautical_twilight_sunset = _named_event(SolarEvent.NAUTICAL_TWILIGHT_SUNSET)
astronomical_twilight_sunrise = _named_event(SolarEvent.ASTRONOMICAL_TWILIGHT_SUNRISE)
astronomical_twilight_sunset = _named_event(SolarEvent.ASTRONOMICAL_TWILIGHT_SUNSET)


def day_events(day: float, coord: GeoCoordinate) -> Dict[str, Optional[datetime]]:
    """Every named event plus ``solar_noon``; unreachable events map to ``None``."""

    events: Dict[str, Optional[datetime]] = {}
    for event in SolarEvent:
        try:
            events[event.value] = event_time(event, day, coord)
        except UnreachableAngleError:
            events[event.value] = None
    events["solar_noon"] = solar_noon(day, coord)
    return events


def solar_event_series(days, coord: GeoCoordinate, angle: Angle, is_rising: bool) -> np.ndarray:
    """Vectorized event Julian days for an array of dates.

    Dates on which the angle is never crossed come back as ``NaN`` rather
    than raising.
    """

    days = np.asarray(days, dtype=float)
    jstar = mean_solar_noon(days, coord.longitude)
    anomaly = mean_anomaly(jstar)
    lam = ecliptic_longitude(anomaly)
    transit = solar_transit(jstar, anomaly, lam)
    cosine = cos_hour_angle(coord.latitude, solar_declination(lam), float(angle))
    unreachable = np.abs(cosine) > 1.0
    offset = np.degrees(np.arccos(np.clip(cosine, -1.0, 1.0))) / 360.0
    events = transit - offset if is_rising else transit + offset
    return np.where(unreachable, np.nan, events)


def compute_sun_times(
    date_utc: date,
    lat: float,
    lon: float,
    twilight: str = "official",
) -> Dict[str, object]:
    """Compute the rising and setting crossing of one twilight tier.

    Parameters
    ----------
    date_utc:
        Date expressed in UTC.
    lat, lon:
        Geographic coordinates in degrees (east-positive longitude).
    twilight:
        Key of :data:`TWILIGHT_ANGLES`.

    Returns
    -------
    dict
        Dictionary containing ``sunrise``, ``sunset``, ``solar_noon`` and
        ``status`` keys. ``status`` is ``ok``, ``polar_day`` or
        ``polar_night``; the event times are ``None`` unless it is ``ok``.
    """

    try:
        angle = TWILIGHT_ANGLES[twilight]
    except KeyError as exc:
        raise ValueError(f"Unsupported twilight selector: {twilight}") from exc

    coord = GeoCoordinate(latitude=lat, longitude=lon)
    day = to_julian_day(date_utc)
    noon = solar_noon(day, coord)
    try:
        rising = solar_event_time(day, coord, angle, True)
        setting = solar_event_time(day, coord, angle, False)
    except UnreachableAngleError as exc:
        return {"sunrise": None, "sunset": None, "solar_noon": noon, "status": exc.status}
    return {"sunrise": rising, "sunset": setting, "solar_noon": noon, "status": "ok"}
