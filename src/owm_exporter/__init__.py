"""owm_exporter - Prometheus exporter for OpenWeatherMap current weather."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("owm-exporter")
except PackageNotFoundError:
    __version__ = "0+local"
from owm_exporter.client import WeatherClient
from owm_exporter.config import ExporterConfig
from owm_exporter.exceptions import (
    OwmConfigError,
    OwmError,
    OwmParseError,
    OwmTransportError,
    OwmUpstreamError,
)
from owm_exporter.metrics import MetricsResponder
from owm_exporter.models import (
    NO_DATA,
    Coordinates,
    ErrorDetail,
    ErrorKind,
    Failure,
    FetchOutcome,
    Reading,
    Success,
    UnitSystem,
)
from owm_exporter.poller import Poller
from owm_exporter.state.store import ReadingStore

__all__ = [
    "__version__",
    "NO_DATA",
    "Coordinates",
    "ErrorDetail",
    "ErrorKind",
    "ExporterConfig",
    "Failure",
    "FetchOutcome",
    "MetricsResponder",
    "OwmConfigError",
    "OwmError",
    "OwmParseError",
    "OwmTransportError",
    "OwmUpstreamError",
    "Poller",
    "Reading",
    "ReadingStore",
    "Success",
    "UnitSystem",
    "WeatherClient",
]
