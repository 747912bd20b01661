"""Unit systems supported by the current-weather API."""

from __future__ import annotations

from enum import StrEnum


class UnitSystem(StrEnum):
    """Unit system requested from the provider.

    The provider performs every conversion; the exporter only chooses
    the request parameter and the unit names shown in metric help text.
    """

    STANDARD = "standard"
    METRIC = "metric"
    IMPERIAL = "imperial"

    @classmethod
    def _missing_(cls, value: object) -> UnitSystem | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if normalized == "kelvin":
            return cls.STANDARD
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def api_param(self) -> str | None:
        """Value of the ``units`` query parameter, ``None`` for the API default."""
        if self is UnitSystem.STANDARD:
            return None
        return self.value

    @property
    def temperature_unit(self) -> str:
        return {
            UnitSystem.STANDARD: "kelvin",
            UnitSystem.METRIC: "celsius",
            UnitSystem.IMPERIAL: "fahrenheit",
        }[self]

    @property
    def speed_unit(self) -> str:
        if self is UnitSystem.IMPERIAL:
            return "miles per hour"
        return "meters per second"

    @property
    def pressure_unit(self) -> str:
        return "hectopascals"
