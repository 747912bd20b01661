"""Base model for OpenWeatherMap payloads and exporter values.

Every model inherits from :class:`OwmBaseModel` which provides:

* ``frozen=True`` so values are replaced wholesale, never mutated.
* ``extra="ignore"`` so new provider fields do not break parsing.
* ``populate_by_name=True`` so models built in code can use field
  names while provider payloads use the validation aliases.

Provider payloads are validated with ``strict=True``; :data:`EpochTimestamp`
converts the epoch seconds the API sends before that strict check.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict


def parse_epoch_timestamp(value: Any) -> Any:
    """Convert epoch seconds to a UTC datetime; anything else is left for validation to reject."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=UTC)
    return value


EpochTimestamp = Annotated[datetime, BeforeValidator(parse_epoch_timestamp)]
"""Annotated type that coerces provider epoch seconds to UTC datetimes."""


class OwmBaseModel(BaseModel):
    """Base for all owm_exporter models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )
