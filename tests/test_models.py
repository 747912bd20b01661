from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from owm_exporter.exceptions import OwmConfigError
from owm_exporter.models import NO_DATA, Coordinates, ErrorKind, Failure, FetchOutcome, Reading, Success, UnitSystem


def test_reading_flattens_provider_payload(owm_payload: dict[str, Any]) -> None:
    reading = Reading.model_validate(owm_payload)

    assert reading.temperature == 72.5
    assert reading.feels_like == 71.8
    assert reading.temperature_min == 70.1
    assert reading.temperature_max == 74.3
    assert reading.pressure == 1012
    assert reading.humidity == 40
    assert reading.wind_speed == 9.2
    assert reading.wind_direction == 240
    assert reading.clouds == 75
    assert reading.condition_code == 500
    assert reading.condition == "light rain"
    assert reading.observed_at == datetime.fromtimestamp(1760700000, tz=UTC)
    assert reading.rain_1h == 0.31
    assert reading.rain_3h is None
    assert reading.snow_1h is None
    assert reading.visibility == 10000
    assert reading.location_name == "Amsterdam"


def test_reading_optional_sections_may_be_absent(owm_payload: dict[str, Any]) -> None:
    for key in ("rain", "clouds", "visibility", "name"):
        owm_payload.pop(key)
    owm_payload["wind"].pop("deg")

    reading = Reading.model_validate(owm_payload)

    assert reading.rain_1h is None
    assert reading.clouds is None
    assert reading.visibility is None
    assert reading.wind_direction is None


@pytest.mark.parametrize(
    ("section", "key"),
    [("main", "temp"), ("main", "humidity"), ("wind", "speed")],
)
def test_reading_requires_core_fields(owm_payload: dict[str, Any], section: str, key: str) -> None:
    owm_payload[section].pop(key)

    with pytest.raises(ValidationError):
        Reading.model_validate(owm_payload)


def test_reading_rejects_wrong_types(owm_payload: dict[str, Any]) -> None:
    owm_payload["main"]["temp"] = "warm"

    with pytest.raises(ValidationError):
        Reading.model_validate(owm_payload)


@pytest.mark.parametrize(
    ("section", "key", "value"),
    [("main", "temp", "72.5"), ("main", "humidity", True), ("main", "pressure", "1012")],
)
def test_strict_reading_rejects_coercible_strings_and_bools(
    owm_payload: dict[str, Any], section: str, key: str, value: Any
) -> None:
    owm_payload[section][key] = value

    with pytest.raises(ValidationError):
        Reading.model_validate(owm_payload, strict=True)


def test_strict_reading_keeps_epoch_timestamp_and_integer_floats(owm_payload: dict[str, Any]) -> None:
    reading = Reading.model_validate(owm_payload, strict=True)

    assert reading.observed_at == datetime.fromtimestamp(1760700000, tz=UTC)
    assert reading.pressure == 1012.0
    assert reading.humidity == 40.0

    owm_payload["dt"] = True
    with pytest.raises(ValidationError):
        Reading.model_validate(owm_payload, strict=True)


def test_reading_requires_a_condition(owm_payload: dict[str, Any]) -> None:
    owm_payload["weather"] = []

    with pytest.raises(ValidationError):
        Reading.model_validate(owm_payload)


def test_reading_is_immutable(make_reading: Any) -> None:
    reading = make_reading()

    with pytest.raises(ValidationError):
        reading.temperature = 0.0


def test_fetch_outcome_discriminates_on_kind(make_reading: Any) -> None:
    adapter: TypeAdapter[FetchOutcome] = TypeAdapter(FetchOutcome)
    success = Success(reading=make_reading())

    assert adapter.validate_python(success.model_dump()) == success
    assert adapter.validate_python(NO_DATA.model_dump()) == NO_DATA
    assert isinstance(NO_DATA, Failure)
    assert NO_DATA.error.kind is ErrorKind.NO_DATA
    assert NO_DATA.error.status_code is None


@pytest.mark.parametrize(
    ("text", "expected", "param"),
    [
        ("standard", UnitSystem.STANDARD, None),
        ("kelvin", UnitSystem.STANDARD, None),
        ("Metric", UnitSystem.METRIC, "metric"),
        ("IMPERIAL", UnitSystem.IMPERIAL, "imperial"),
    ],
)
def test_unit_system_parsing(text: str, expected: UnitSystem, param: str | None) -> None:
    units = UnitSystem(text)

    assert units is expected
    assert units.api_param == param


def test_unit_system_rejects_unknown_names() -> None:
    with pytest.raises(ValueError):
        UnitSystem("rankine")


def test_unit_names() -> None:
    assert UnitSystem.IMPERIAL.temperature_unit == "fahrenheit"
    assert UnitSystem.IMPERIAL.speed_unit == "miles per hour"
    assert UnitSystem.METRIC.speed_unit == "meters per second"
    assert UnitSystem.STANDARD.temperature_unit == "kelvin"


def test_coordinates_parse() -> None:
    coords = Coordinates.parse(" 52.37 , 4.89 ")

    assert coords.latitude == 52.37
    assert coords.longitude == 4.89
    assert str(coords) == "52.37,4.89"


@pytest.mark.parametrize("text", ["", "52.37", "52.37,", "a,b", "1,2,3", "91,0", "0,-181", "nan,0", "inf,0"])
def test_coordinates_parse_rejects_invalid(text: str) -> None:
    with pytest.raises(OwmConfigError):
        Coordinates.parse(text)
