"""Pydantic models for API requests and responses."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Twilight(str, Enum):
    """Enumeration of supported twilight definitions."""

    official = "official"
    civil = "civil"
    nautical = "nautical"
    astronomical = "astronomical"


class Axis(str, Enum):
    latitude = "latitude"
    longitude = "longitude"


class LocationQueryParams(BaseModel):
    """Validated location and date shared by the solar endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    lat: float = Field(..., ge=-90.0, le=90.0, description="Latitude in degrees")
    lon: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in degrees, east positive"
    )
    date_utc: date = Field(..., alias="date", description="UTC calendar date (YYYY-MM-DD)")
    offset_hours: Optional[float] = Field(
        None,
        description="Optional fixed offset in hours applied to derive local times",
    )

    @field_validator("offset_hours")
    @classmethod
    def validate_offset_hours(cls, value: Optional[float]) -> Optional[float]:
        if value is None:
            return value
        if not -24.0 < value < 24.0:
            raise ValueError("offset_hours must be within ±24 hours")
        return value


class SunQueryParams(LocationQueryParams):
    """Validated query parameters for the ``/sun`` endpoint."""

    twilight: Optional[Twilight] = Field(
        None, description="Twilight definition (defaults to the configured tier)"
    )


class SunResponse(BaseModel):
    """Rising/setting crossing of one twilight tier."""

    ok: bool = True
    status: str = Field(..., description="ok, polar_day or polar_night")
    date_utc: date = Field(..., description="Requested UTC date")
    latitude: float = Field(..., description="Latitude in degrees")
    longitude: float = Field(..., description="Longitude in degrees")
    twilight: Twilight = Field(..., description="Applied twilight definition")
    sunrise_utc: Optional[str] = Field(
        None, description="Sunrise time in UTC (ISO-8601)"
    )
    sunset_utc: Optional[str] = Field(
        None, description="Sunset time in UTC (ISO-8601)"
    )
    solar_noon_utc: str = Field(..., description="Solar transit in UTC (ISO-8601)")
    offset_hours: Optional[float] = Field(
        None, description="User-specified offset in hours"
    )
    sunrise_local: Optional[str] = Field(
        None, description="Sunrise expressed in local time when offset provided"
    )
    sunset_local: Optional[str] = Field(
        None, description="Sunset expressed in local time when offset provided"
    )


class EventsResponse(BaseModel):
    """Every named event of one day; unreachable events are null."""

    ok: bool = True
    date_utc: date
    latitude: float
    longitude: float
    offset_hours: Optional[float] = None
    events_utc: Dict[str, Optional[str]]
    events_local: Optional[Dict[str, Optional[str]]] = None


class DMSResponse(BaseModel):
    """A DMS value together with its hemisphere and decimal equivalent."""

    ok: bool = True
    degrees: int
    minutes: int
    seconds: float
    direction: str = Field(..., description="Hemisphere letter (N, S, E or W)")
    decimal: float = Field(..., description="Signed decimal degrees")
    text: str = Field(..., description="DMS notation")


class HealthResponse(BaseModel):
    """Health-check response."""

    ok: bool = True
    version: str
    events: List[str]


class ErrorResponse(BaseModel):
    """Error payload."""

    ok: bool = False
    code: str
    error: str
