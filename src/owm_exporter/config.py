"""Exporter configuration."""

from __future__ import annotations

import dataclasses
import math
import os
from collections.abc import Mapping
from typing import Any

from owm_exporter._constants import (
    DEFAULT_HOST,
    DEFAULT_INTERVAL_S,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT_S,
    OWM_API_ENDPOINT,
)
from owm_exporter.exceptions import OwmConfigError
from owm_exporter.models.coordinates import Coordinates
from owm_exporter.models.units import UnitSystem


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise OwmConfigError(f"{key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ExporterConfig:
    """Exporter configuration.

    Parameters
    ----------
    coordinates : Coordinates
        Location to report on. ``"lat,lon"`` strings are parsed.
    api_key : str
        OpenWeatherMap API key, sent as ``appid``.
    units : UnitSystem
        Unit system requested from the API. Strings are parsed.
    interval : float
        Seconds between fetch cycles.
    port : int
        Port the metrics server listens on.
    host : str
        Address the metrics server binds to.
    location : str or None
        If set, adds a ``location`` label to every exported metric.
    request_timeout : float
        Total timeout for one API request, seconds.
    base_url : str
        Current-weather endpoint.
    """

    coordinates: Coordinates
    api_key: str
    units: UnitSystem = UnitSystem.STANDARD
    interval: float = DEFAULT_INTERVAL_S
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    location: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_S
    base_url: str = OWM_API_ENDPOINT

    def __post_init__(self) -> None:
        if isinstance(self.coordinates, str):
            object.__setattr__(self, "coordinates", Coordinates.parse(self.coordinates))
        if not isinstance(self.coordinates, Coordinates):
            raise OwmConfigError("coordinates are required")

        if isinstance(self.units, str) and not isinstance(self.units, UnitSystem):
            try:
                object.__setattr__(self, "units", UnitSystem(self.units))
            except ValueError as exc:
                choices = ", ".join(member.value for member in UnitSystem)
                raise OwmConfigError(f"invalid units {self.units!r}, must be one of: {choices}") from exc

        if not self.api_key or not self.api_key.strip():
            raise OwmConfigError("an OpenWeatherMap API key is required (OWM_API_KEY)")
        if not math.isfinite(self.interval) or self.interval <= 0:
            raise OwmConfigError(f"interval must be a positive number of seconds, got {self.interval}")
        if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
            raise OwmConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not 0 < self.port < 65536:
            raise OwmConfigError(f"port must be between 1 and 65535, got {self.port}")
        if self.location is not None and not self.location.strip():
            object.__setattr__(self, "location", None)

    @classmethod
    def from_env(cls, **overrides: Any) -> ExporterConfig:
        """Create configuration from environment variables.

        Reads ``OWM_COORDS``, ``OWM_API_KEY`` and the optional ``OWM_*``
        variables. Explicit keyword arguments override environment
        values; ``None`` overrides are ignored so unset CLI flags fall
        through to the environment.

        Raises
        ------
        OwmConfigError
            When a value is missing or invalid.
        """
        env = os.environ
        overrides = {key: value for key, value in overrides.items() if value is not None}

        _ENV_CONFIG_MAP = {
            "OWM_COORDS": "coordinates",
            "OWM_API_KEY": "api_key",
            "OWM_UNITS": "units",
            "OWM_HOST": "host",
            "OWM_LOCATION": "location",
            "OWM_BASE_URL": "base_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval = _env_float(env, "OWM_INTERVAL")
        if interval is not None:
            config_kwargs["interval"] = interval

        timeout = _env_float(env, "OWM_REQUEST_TIMEOUT")
        if timeout is not None:
            config_kwargs["request_timeout"] = timeout

        port_env = env.get("OWM_PORT")
        if port_env is not None:
            try:
                config_kwargs["port"] = int(port_env)
            except ValueError as exc:
                raise OwmConfigError(f"OWM_PORT must be an integer, got {port_env!r}") from exc

        config_kwargs.update(overrides)

        if "coordinates" not in config_kwargs:
            raise OwmConfigError("coordinates are required (OWM_COORDS or positional 'lat,lon')")
        if "api_key" not in config_kwargs:
            raise OwmConfigError("an OpenWeatherMap API key is required (OWM_API_KEY)")

        return cls(**config_kwargs)
