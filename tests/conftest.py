from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from suntime.julian import to_julian_day  # noqa: E402
from suntime.solar import GeoCoordinate  # noqa: E402


@pytest.fixture
def flint_hill() -> GeoCoordinate:
    """Flint Hill, Missouri (90.85866° W, 38.85563244° N)."""
    return GeoCoordinate(latitude=38.85563244, longitude=-90.85866)


@pytest.fixture
def jan_7_2025() -> float:
    return to_julian_day(date(2025, 1, 7))
