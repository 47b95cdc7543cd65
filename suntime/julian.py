"""Conversions between civil UTC date-times and Julian days."""

from __future__ import annotations

import math
from datetime import UTC, date, datetime, timedelta, timezone
from typing import Union

import erfa
import numpy as np

__all__ = [
    "J2000",
    "SECONDS_PER_DAY",
    "apply_utc_offset",
    "from_julian_day",
    "julian_day_noon",
    "to_julian_day",
]

J2000 = 2451545.0  # 2000-01-01 12:00 UTC
SECONDS_PER_DAY = 86400.0


def to_julian_day(value: Union[date, datetime]) -> float:
    """Return the Julian day for *value*.

    A plain :class:`~datetime.date` is taken as midnight UTC of that date, so
    the result always ends in ``.5``. Datetimes must be timezone-aware; they
    are converted to UTC before the calendar conversion and truncated to
    whole seconds.
    """

    if isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError("datetime must be timezone-aware (UTC)")
        value = value.astimezone(UTC)
        # Sub-second precision is truncated to whole seconds.
        seconds = value.hour * 3600 + value.minute * 60 + value.second
    else:
        seconds = 0.0

    djm0, djm = erfa.cal2jd(value.year, value.month, value.day)
    return float(djm0) + float(djm) + seconds / SECONDS_PER_DAY


def from_julian_day(jd: float) -> datetime:
    """Return the UTC instant for *jd*, rounded to the nearest whole second."""

    if not math.isfinite(jd):
        raise ValueError(f"Julian day must be finite, got {jd!r}")
    year, month, day, fraction = erfa.jd2cal(jd, 0.0)
    midnight = datetime(int(year), int(month), int(day), tzinfo=UTC)
    # A fraction that rounds up to 86400 s rolls over into the next day.
    return midnight + timedelta(seconds=round(float(fraction) * SECONDS_PER_DAY))


def julian_day_noon(jd: float) -> float:
    """Julian day of noon UTC on the civil date containing *jd*.

    Whole Julian days fall on noon, so midnight is ``x.5``. Works elementwise
    on numpy arrays.
    """

    return np.floor(jd + 0.5)


def apply_utc_offset(dt: datetime, offset_hours: float) -> datetime:
    """Express the UTC instant *dt* in a fixed offset of *offset_hours*."""

    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware (UTC)")
    if not -24.0 < offset_hours < 24.0:
        raise ValueError("offset_hours must be strictly within ±24 hours")
    return dt.astimezone(timezone(timedelta(hours=offset_hours)))
