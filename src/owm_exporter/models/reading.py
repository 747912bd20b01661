"""Current-weather reading model.

The provider answers with a nested document::

    {"weather": [{"id": 800, "description": "clear sky", ...}],
     "main": {"temp": 291.4, "feels_like": 290.9, "temp_min": 290.1,
              "temp_max": 292.6, "pressure": 1021, "humidity": 62},
     "wind": {"speed": 4.1, "deg": 250},
     "clouds": {"all": 0},
     "rain": {"1h": 0.25},
     "visibility": 10000,
     "dt": 1760700000,
     "name": "Amsterdam", ...}

:class:`Reading` flattens it through ``AliasPath`` validation aliases.
A missing or mistyped required field fails validation as a whole; there
is no partially populated reading. Validate provider payloads with
``strict=True`` so strings or booleans are never coerced into numbers.
"""

from __future__ import annotations

from pydantic import AliasPath, Field

from owm_exporter.models._base import EpochTimestamp, OwmBaseModel


class Reading(OwmBaseModel):
    """One complete weather observation for the configured location.

    Values are in the unit system that was requested; see
    :class:`~owm_exporter.models.units.UnitSystem`.

    Parameters
    ----------
    temperature : float
        Air temperature.
    feels_like : float
        Perceived temperature.
    temperature_min, temperature_max : float
        Min/max temperature currently observed across the area.
    pressure : float
        Atmospheric pressure at sea level, hPa.
    humidity : float
        Relative humidity, percent.
    wind_speed : float
        Wind speed.
    wind_direction : float or None
        Wind direction, meteorological degrees.
    clouds : float or None
        Cloudiness, percent.
    condition_code : int
        Provider weather condition id (e.g. ``800`` for clear sky).
    condition : str or None
        Human-readable condition description.
    observed_at : datetime
        Time of the observation as reported by the provider (UTC).
    rain_1h, rain_3h, snow_1h, snow_3h : float or None
        Precipitation volume over the last 1/3 hours, mm.
    visibility : float or None
        Visibility in meters (not affected by the unit system).
    location_name : str or None
        Name the provider resolved the coordinates to.
    """

    temperature: float = Field(validation_alias=AliasPath("main", "temp"))
    feels_like: float = Field(validation_alias=AliasPath("main", "feels_like"))
    temperature_min: float = Field(validation_alias=AliasPath("main", "temp_min"))
    temperature_max: float = Field(validation_alias=AliasPath("main", "temp_max"))
    pressure: float = Field(validation_alias=AliasPath("main", "pressure"))
    humidity: float = Field(validation_alias=AliasPath("main", "humidity"))
    wind_speed: float = Field(validation_alias=AliasPath("wind", "speed"))
    wind_direction: float | None = Field(default=None, validation_alias=AliasPath("wind", "deg"))
    clouds: float | None = Field(default=None, validation_alias=AliasPath("clouds", "all"))
    condition_code: int = Field(validation_alias=AliasPath("weather", 0, "id"))
    condition: str | None = Field(default=None, validation_alias=AliasPath("weather", 0, "description"))
    observed_at: EpochTimestamp = Field(validation_alias=AliasPath("dt"))
    rain_1h: float | None = Field(default=None, validation_alias=AliasPath("rain", "1h"))
    rain_3h: float | None = Field(default=None, validation_alias=AliasPath("rain", "3h"))
    snow_1h: float | None = Field(default=None, validation_alias=AliasPath("snow", "1h"))
    snow_3h: float | None = Field(default=None, validation_alias=AliasPath("snow", "3h"))
    visibility: float | None = Field(default=None, validation_alias=AliasPath("visibility"))
    location_name: str | None = Field(default=None, validation_alias=AliasPath("name"))

    def summary(self) -> str:
        """One-line description used in log output."""
        return (
            f"temp={self.temperature} humidity={self.humidity} pressure={self.pressure} "
            f"wind={self.wind_speed} condition={self.condition_code}"
        )
