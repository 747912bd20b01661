"""Typed models for weather readings and fetch outcomes."""

from owm_exporter.models.coordinates import Coordinates
from owm_exporter.models.outcome import NO_DATA, ErrorDetail, ErrorKind, Failure, FetchOutcome, Success
from owm_exporter.models.reading import Reading
from owm_exporter.models.units import UnitSystem

__all__ = [
    "NO_DATA",
    "Coordinates",
    "ErrorDetail",
    "ErrorKind",
    "Failure",
    "FetchOutcome",
    "Reading",
    "Success",
    "UnitSystem",
]
