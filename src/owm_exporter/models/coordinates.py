"""Geographic coordinates of the monitored location."""

from __future__ import annotations

import math

from pydantic import Field, ValidationError, field_validator

from owm_exporter.exceptions import OwmConfigError
from owm_exporter.models._base import OwmBaseModel


class Coordinates(OwmBaseModel):
    """Latitude/longitude pair in decimal degrees.

    Parameters
    ----------
    latitude : float
        Latitude, ``-90`` to ``90``.
    longitude : float
        Longitude, ``-180`` to ``180``.
    """

    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)

    @field_validator("latitude", "longitude")
    @classmethod
    def _ensure_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("coordinate must be a finite number")
        return value

    @classmethod
    def parse(cls, text: str) -> Coordinates:
        """Parse ``"lat,lon"`` text, e.g. ``"52.37,4.89"``.

        Raises :class:`OwmConfigError` for anything that is not two
        finite numbers within geographic range.
        """
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 2 or not all(parts):
            raise OwmConfigError(f"coordinates must be 'lat,lon', got {text!r}")
        try:
            latitude, longitude = (float(part) for part in parts)
        except ValueError as exc:
            raise OwmConfigError(f"coordinates must be numeric, got {text!r}") from exc
        try:
            return cls(latitude=latitude, longitude=longitude)
        except ValidationError as exc:
            raise OwmConfigError(f"invalid coordinates {text!r}: {exc.errors()[0]['msg']}") from exc

    def __str__(self) -> str:
        return f"{self.latitude},{self.longitude}"
