from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from suntime.julian import (
    J2000,
    apply_utc_offset,
    from_julian_day,
    julian_day_noon,
    to_julian_day,
)


def test_date_maps_to_midnight():
    assert to_julian_day(date(2025, 1, 7)) == 2460682.5


def test_j2000_epoch():
    assert to_julian_day(datetime(2000, 1, 1, 12, tzinfo=UTC)) == J2000


def test_aware_datetime_converted_to_utc():
    cst = timezone(timedelta(hours=-6))
    local = datetime(2025, 1, 7, 6, 0, tzinfo=cst)
    assert to_julian_day(local) == 2460683.0


def test_naive_datetime_rejected():
    with pytest.raises(ValueError):
        to_julian_day(datetime(2025, 1, 7, 12, 0))


def test_from_julian_day_midnight():
    assert from_julian_day(2460682.5) == datetime(2025, 1, 7, tzinfo=UTC)
    assert from_julian_day(2460680.5) == datetime(2025, 1, 5, tzinfo=UTC)


def test_from_julian_day_returns_utc():
    result = from_julian_day(J2000)
    assert result.tzinfo is not None
    assert result.utcoffset() == timedelta(0)
    assert result == datetime(2000, 1, 1, 12, tzinfo=UTC)


def test_from_julian_day_rounds_into_next_day():
    # 0.4 s before midnight rounds up to 2025-01-08 00:00:00.
    jd = 2460683.5 - 0.4 / 86400.0
    assert from_julian_day(jd) == datetime(2025, 1, 8, tzinfo=UTC)


def test_from_julian_day_rejects_nan():
    with pytest.raises(ValueError):
        from_julian_day(float("nan"))


@pytest.mark.parametrize(
    "moment",
    [
        datetime(1901, 1, 1, 0, 0, 0, tzinfo=UTC),
        datetime(1969, 7, 20, 20, 17, 40, tzinfo=UTC),
        datetime(1970, 1, 1, tzinfo=UTC),
        datetime(2024, 2, 29, 23, 59, 59, tzinfo=UTC),
        datetime(2025, 1, 7, 13, 19, 48, tzinfo=UTC),
        datetime(2099, 12, 31, 23, 59, 59, tzinfo=UTC),
    ],
)
def test_round_trip_to_the_second(moment):
    assert from_julian_day(to_julian_day(moment)) == moment


@pytest.mark.parametrize("microsecond", [400_000, 500_000, 600_000, 999_999])
def test_round_trip_truncates_sub_second_precision(microsecond):
    moment = datetime(2030, 6, 1, 8, 30, 15, microsecond, tzinfo=UTC)
    assert from_julian_day(to_julian_day(moment)) == moment.replace(microsecond=0)


@pytest.mark.parametrize(
    "jd, noon",
    [
        (2460682.5, 2460683.0),  # midnight starts the civil day
        (2460682.99, 2460683.0),
        (2460683.0, 2460683.0),
        (2460683.49, 2460683.0),  # 23:45 the same day
        (2460682.49, 2460682.0),  # still the previous day
    ],
)
def test_julian_day_noon(jd, noon):
    assert julian_day_noon(jd) == noon


def test_apply_utc_offset():
    sunrise = datetime(2025, 1, 7, 13, 22, 1, tzinfo=UTC)
    local = apply_utc_offset(sunrise, -6)
    assert local.isoformat() == "2025-01-07T07:22:01-06:00"
    assert local == sunrise


def test_apply_utc_offset_rejects_out_of_range():
    with pytest.raises(ValueError):
        apply_utc_offset(datetime(2025, 1, 7, tzinfo=UTC), 24)
