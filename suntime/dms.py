"""Degrees/minutes/seconds notation for geographic coordinates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

__all__ = [
    "DMS",
    "Hemisphere",
    "InvalidDirectionError",
    "ParseFormatError",
    "decimal_to_dms",
    "dms_to_decimal",
    "format_dms",
    "parse_dms",
]

DECIMAL_PLACES = 7
MINUTE_FRACTION_PLACES = 4

_DMS_PATTERN = re.compile(
    r"""^(?P<degrees>\d{1,2})°\s+
         (?P<minutes>\d{1,2})'\s+
         (?P<seconds>\d{1,2}(?:\.\d+)?)"\s+
         (?P<hemisphere>[NSEW])$""",
    re.ASCII | re.IGNORECASE | re.VERBOSE,
)


class ParseFormatError(ValueError):
    """Raised when text does not follow the ``D° M' S" H`` pattern."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid DMS format: {text!r}")


class InvalidDirectionError(ValueError):
    """Raised for a hemisphere letter outside N, S, E and W."""

    def __init__(self, direction: object) -> None:
        self.direction = direction
        super().__init__(f"Invalid direction {direction!r}; use N, S, E or W")


class Hemisphere(str, Enum):
    N = "N"
    S = "S"
    E = "E"
    W = "W"

    @property
    def is_negative(self) -> bool:
        return self in (Hemisphere.S, Hemisphere.W)


@dataclass(frozen=True)
class DMS:
    """Unsigned angle split into whole degrees, whole minutes and seconds.

    The sign lives in the accompanying :class:`Hemisphere`.
    """

    degrees: int
    minutes: int
    seconds: float

    def __post_init__(self) -> None:
        if self.degrees < 0:
            raise ValueError(f"degrees must be non-negative, got {self.degrees}")
        if not 0 <= self.minutes <= 59:
            raise ValueError(f"minutes must be within [0, 59], got {self.minutes}")
        if not 0.0 <= self.seconds < 60.0:
            raise ValueError(f"seconds must be within [0, 60), got {self.seconds}")


def _hemisphere(direction: Union[Hemisphere, str]) -> Hemisphere:
    try:
        return Hemisphere(direction)
    except ValueError as exc:
        raise InvalidDirectionError(direction) from exc


def parse_dms(text: str) -> Tuple[DMS, Hemisphere]:
    """Parse text such as ``38° 51' 31.44" N``.

    Raises
    ------
    ParseFormatError
        If *text* deviates from the pattern in any way.
    """

    match = _DMS_PATTERN.match(text.strip())
    if match is None:
        raise ParseFormatError(text)
    try:
        dms = DMS(
            degrees=int(match["degrees"]),
            minutes=int(match["minutes"]),
            seconds=float(match["seconds"]),
        )
    except ValueError as exc:
        raise ParseFormatError(text) from exc
    return dms, Hemisphere(match["hemisphere"].upper())


def dms_to_decimal(dms: DMS, direction: Union[Hemisphere, str]) -> float:
    """Signed decimal degrees, rounded to seven places."""

    hemisphere = _hemisphere(direction)
    decimal = dms.degrees + dms.minutes / 60.0 + dms.seconds / 3600.0
    if hemisphere.is_negative:
        decimal = -decimal
    return round(decimal, DECIMAL_PLACES)


def decimal_to_dms(decimal: float, is_latitude: bool) -> Tuple[DMS, Hemisphere]:
    """Split signed decimal degrees into :class:`DMS` and a hemisphere.

    The leftover minute fraction is rounded to four places before it is
    scaled to seconds.
    """

    limit = 90.0 if is_latitude else 180.0
    if not -limit <= decimal <= limit:
        axis = "Latitude" if is_latitude else "Longitude"
        raise ValueError(f"{axis} out of range [-{limit:g}, {limit:g}]: {decimal}")
    if is_latitude:
        hemisphere = Hemisphere.S if decimal < 0 else Hemisphere.N
    else:
        hemisphere = Hemisphere.W if decimal < 0 else Hemisphere.E
    magnitude = abs(decimal)

    degrees = int(magnitude)
    minutes = int((magnitude - degrees) * 60)
    seconds = round((magnitude - degrees) * 60 - minutes, MINUTE_FRACTION_PLACES) * 60

    if seconds >= 60.0:
        seconds -= 60.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        degrees += 1
    return DMS(degrees=degrees, minutes=minutes, seconds=seconds), hemisphere


def format_dms(dms: DMS, direction: Union[Hemisphere, str]) -> str:
    """Render *dms* in the notation accepted by :func:`parse_dms`."""

    hemisphere = _hemisphere(direction)
    degrees, minutes, seconds = dms.degrees, dms.minutes, round(dms.seconds, 4)
    if seconds >= 60.0:
        seconds -= 60.0
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        degrees += 1
    text = f"{seconds:.4f}".rstrip("0").rstrip(".")
    return f"{degrees}° {minutes}' {text}\" {hemisphere.value}"
