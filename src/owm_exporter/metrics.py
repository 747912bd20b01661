"""Prometheus exposition of the stored outcome.

Each scrape collects straight from the :class:`ReadingStore`; nothing
here touches the network.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from prometheus_client import CollectorRegistry, generate_latest
from prometheus_client.core import GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from owm_exporter._constants import METRIC_PREFIX
from owm_exporter.models.outcome import ErrorKind, Failure, FetchOutcome
from owm_exporter.models.reading import Reading
from owm_exporter.models.units import UnitSystem
from owm_exporter.state.store import ReadingStore

CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


def _reading_metrics(reading: Reading, units: UnitSystem) -> list[tuple[str, str, float | None]]:
    """(name, help, value) for every reading attribute; optional ones may be ``None``."""
    temp = units.temperature_unit
    return [
        ("temperature", f"Air temperature in {temp}.", reading.temperature),
        ("feels_like", f"Perceived temperature in {temp}.", reading.feels_like),
        ("temperature_min", f"Minimum temperature across the area in {temp}.", reading.temperature_min),
        ("temperature_max", f"Maximum temperature across the area in {temp}.", reading.temperature_max),
        ("humidity", "Relative humidity in percent.", reading.humidity),
        ("pressure", f"Atmospheric pressure in {units.pressure_unit}.", reading.pressure),
        ("wind_speed", f"Wind speed in {units.speed_unit}.", reading.wind_speed),
        ("wind_direction", "Wind direction in degrees.", reading.wind_direction),
        ("clouds", "Cloudiness in percent.", reading.clouds),
        ("condition_code", "Provider weather condition id.", reading.condition_code),
        (
            "observation_timestamp_seconds",
            "Time of the observation as reported by the provider, unix seconds.",
            reading.observed_at.timestamp(),
        ),
        ("rain_1h", "Rain volume over the last hour in millimeters.", reading.rain_1h),
        ("rain_3h", "Rain volume over the last 3 hours in millimeters.", reading.rain_3h),
        ("snow_1h", "Snow volume over the last hour in millimeters.", reading.snow_1h),
        ("snow_3h", "Snow volume over the last 3 hours in millimeters.", reading.snow_3h),
        ("visibility", "Visibility in meters.", reading.visibility),
    ]


class ReadingCollector(Collector):
    """Collector turning the current outcome into gauges.

    On success: ``owm_error 0`` and one gauge per reading attribute.
    On failure: ``owm_error 1``, plus ``owm_error_status_code`` when the
    API answered with an error status, and no weather gauges.
    """

    def __init__(self, store: ReadingStore, units: UnitSystem, *, location: str | None = None) -> None:
        self._store = store
        self._units = units
        self._location = location

    def _gauge(self, name: str, documentation: str, value: float) -> GaugeMetricFamily:
        full_name = f"{METRIC_PREFIX}_{name}"
        if self._location is None:
            return GaugeMetricFamily(full_name, documentation, value=value)
        gauge = GaugeMetricFamily(full_name, documentation, labels=["location"])
        gauge.add_metric([self._location], value)
        return gauge

    def collect(self) -> Iterator[Metric]:
        outcome = self._store.read()

        if isinstance(outcome, Failure):
            yield self._gauge("error", "1 if the latest weather fetch failed, 0 otherwise.", 1)
            if outcome.error.status_code is not None:
                yield self._gauge(
                    "error_status_code",
                    "HTTP status of the failed weather API response.",
                    outcome.error.status_code,
                )
            return

        yield self._gauge("error", "1 if the latest weather fetch failed, 0 otherwise.", 0)
        for name, documentation, value in _reading_metrics(outcome.reading, self._units):
            if value is not None:
                yield self._gauge(name, documentation, value)


class MetricsResponder:
    """Renders the store as exposition text, one call per scrape."""

    def __init__(self, store: ReadingStore, units: UnitSystem, *, location: str | None = None) -> None:
        self._registry = CollectorRegistry(auto_describe=False)
        self._registry.register(ReadingCollector(store, units, location=location))

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


def render_outcome(outcome: FetchOutcome, units: UnitSystem, *, location: str | None = None) -> str:
    """Render a single outcome without a long-lived store."""
    store = ReadingStore()
    store.write(outcome)
    return MetricsResponder(store, units, location=location).render()


def outcome_as_json(outcome: FetchOutcome) -> Any:
    """JSON view: the reading, ``None`` before the first fetch, or the error."""
    if isinstance(outcome, Failure):
        if outcome.error.kind is ErrorKind.NO_DATA:
            return None
        return {
            "error": outcome.error.status_code,
            "kind": outcome.error.kind.value,
            "cause": outcome.error.cause,
        }
    return outcome.reading.model_dump(mode="json")
