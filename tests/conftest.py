from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from owm_exporter.models.reading import Reading


def _payload() -> dict[str, Any]:
    return {
        "coord": {"lon": 4.89, "lat": 52.37},
        "weather": [{"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"}],
        "base": "stations",
        "main": {
            "temp": 72.5,
            "feels_like": 71.8,
            "temp_min": 70.1,
            "temp_max": 74.3,
            "pressure": 1012,
            "humidity": 40,
        },
        "visibility": 10000,
        "wind": {"speed": 9.2, "deg": 240},
        "rain": {"1h": 0.31},
        "clouds": {"all": 75},
        "dt": 1760700000,
        "id": 2759794,
        "name": "Amsterdam",
        "cod": 200,
    }


@pytest.fixture
def owm_payload() -> dict[str, Any]:
    """A current-weather response body as returned with ``units=imperial``."""
    return _payload()


@pytest.fixture
def make_reading() -> Callable[..., Reading]:
    def _make(**overrides: Any) -> Reading:
        fields: dict[str, Any] = {
            "temperature": 72.5,
            "feels_like": 71.8,
            "temperature_min": 70.1,
            "temperature_max": 74.3,
            "pressure": 1012,
            "humidity": 40,
            "wind_speed": 9.2,
            "wind_direction": 240,
            "clouds": 75,
            "condition_code": 500,
            "condition": "light rain",
            "observed_at": datetime(2025, 10, 17, 11, 20, tzinfo=UTC),
        }
        fields.update(overrides)
        return Reading(**fields)

    return _make
