"""FastAPI application exposing solar event times and DMS conversion."""

from __future__ import annotations

import json
import logging
import time
from datetime import UTC, datetime
from typing import Annotated, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from suntime import __version__
from suntime.config import load_settings
from suntime.dms import (
    InvalidDirectionError,
    ParseFormatError,
    decimal_to_dms,
    dms_to_decimal,
    format_dms,
    parse_dms,
)
from suntime.julian import apply_utc_offset, to_julian_day
from suntime.solar import GeoCoordinate, SolarEvent, compute_sun_times, day_events
from suntime_models import (
    Axis,
    DMSResponse,
    ErrorResponse,
    EventsResponse,
    HealthResponse,
    LocationQueryParams,
    SunQueryParams,
    SunResponse,
    Twilight,
)

SETTINGS = load_settings()

logging.basicConfig(level=SETTINGS.log_level, format="%(message)s")
LOGGER = logging.getLogger("suntime-api")

APP_DESCRIPTION = (
    "Sunrise, sunset and twilight times from the mean-sun approximation, "
    "plus degrees/minutes/seconds coordinate conversion"
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

app = FastAPI(
    title="Suntime API",
    description=APP_DESCRIPTION,
    version=__version__,
)

if SETTINGS.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(SETTINGS.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _format_utc(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    return dt.astimezone(UTC).isoformat().replace("+00:00", "Z")


def _format_local(dt: Optional[datetime], offset_hours: Optional[float]) -> Optional[str]:
    if dt is None or offset_hours is None:
        return None
    return apply_utc_offset(dt, offset_hours).isoformat()


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = ErrorResponse(code=code, error=message)
    LOGGER.error(json.dumps({"event": "error", "code": code, "message": message}))
    return JSONResponse(status_code=status_code, content=payload.model_dump())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = ", ".join(error["msg"] for error in exc.errors())
    return _error_response(422, "validation_error", messages)


@app.exception_handler(ParseFormatError)
async def parse_format_exception_handler(
    request: Request, exc: ParseFormatError
) -> JSONResponse:
    return _error_response(400, "parse_format_error", str(exc))


@app.exception_handler(InvalidDirectionError)
async def invalid_direction_exception_handler(
    request: Request, exc: InvalidDirectionError
) -> JSONResponse:
    return _error_response(400, "invalid_direction", str(exc))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    detail = exc.detail
    if isinstance(detail, dict):
        message = detail.get("error") or detail.get("message") or str(detail)
    elif isinstance(detail, list):
        message = ", ".join(str(item) for item in detail)
    else:
        message = str(detail)
    return _error_response(exc.status_code, f"http_{exc.status_code}", message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled exception", exc_info=exc)
    return _error_response(500, "internal_error", "Unhandled server error")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        ok=True,
        version=__version__,
        events=[event.value for event in SolarEvent],
    )


@app.get("/sun", response_model=SunResponse, responses=ERROR_RESPONSES)
def sun_endpoint(params: Annotated[SunQueryParams, Query()]) -> SunResponse:
    start_time = time.perf_counter()
    twilight = params.twilight or Twilight(SETTINGS.default_twilight)
    try:
        result = compute_sun_times(
            date_utc=params.date_utc,
            lat=params.lat,
            lon=params.lon,
            twilight=twilight.value,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    duration_ms = (time.perf_counter() - start_time) * 1000.0

    response = SunResponse(
        status=result["status"],
        date_utc=params.date_utc,
        latitude=params.lat,
        longitude=params.lon,
        twilight=twilight,
        sunrise_utc=_format_utc(result["sunrise"]),
        sunset_utc=_format_utc(result["sunset"]),
        solar_noon_utc=_format_utc(result["solar_noon"]),
        offset_hours=params.offset_hours,
        sunrise_local=_format_local(result["sunrise"], params.offset_hours),
        sunset_local=_format_local(result["sunset"], params.offset_hours),
    )

    LOGGER.info(
        json.dumps(
            {
                "event": "sun",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_utc.isoformat(),
                "twilight": twilight.value,
                "status": response.status,
                "duration_ms": round(duration_ms, 3),
            }
        )
    )
    return response


@app.get("/events", response_model=EventsResponse, responses=ERROR_RESPONSES)
def events_endpoint(params: Annotated[LocationQueryParams, Query()]) -> EventsResponse:
    try:
        coord = GeoCoordinate(latitude=params.lat, longitude=params.lon)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    events = day_events(to_julian_day(params.date_utc), coord)

    events_local: Optional[Dict[str, Optional[str]]] = None
    if params.offset_hours is not None:
        events_local = {
            name: _format_local(value, params.offset_hours) for name, value in events.items()
        }

    LOGGER.info(
        json.dumps(
            {
                "event": "events",
                "lat": params.lat,
                "lon": params.lon,
                "date": params.date_utc.isoformat(),
                "unreachable": sorted(name for name, value in events.items() if value is None),
            }
        )
    )
    return EventsResponse(
        date_utc=params.date_utc,
        latitude=params.lat,
        longitude=params.lon,
        offset_hours=params.offset_hours,
        events_utc={name: _format_utc(value) for name, value in events.items()},
        events_local=events_local,
    )


@app.get("/dms/parse", response_model=DMSResponse, responses=ERROR_RESPONSES)
def dms_parse_endpoint(
    text: Annotated[str, Query(description="DMS text, e.g. 38° 51' 31.44\" N")],
) -> DMSResponse:
    dms, direction = parse_dms(text)
    return DMSResponse(
        degrees=dms.degrees,
        minutes=dms.minutes,
        seconds=dms.seconds,
        direction=direction.value,
        decimal=dms_to_decimal(dms, direction),
        text=format_dms(dms, direction),
    )


@app.get("/dms/format", response_model=DMSResponse, responses=ERROR_RESPONSES)
def dms_format_endpoint(
    value: Annotated[float, Query(ge=-180.0, le=180.0, description="Decimal degrees")],
    axis: Annotated[Axis, Query(description="Coordinate axis")] = Axis.latitude,
) -> DMSResponse:
    try:
        dms, direction = decimal_to_dms(value, axis is Axis.latitude)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return DMSResponse(
        degrees=dms.degrees,
        minutes=dms.minutes,
        seconds=dms.seconds,
        direction=direction.value,
        decimal=dms_to_decimal(dms, direction),
        text=format_dms(dms, direction),
    )
