"""Internal constants shared across the package."""

OWM_API_ENDPOINT = "https://api.openweathermap.org/data/2.5/weather"
USER_AGENT = "owm-exporter"

DEFAULT_INTERVAL_S = 120.0
DEFAULT_REQUEST_TIMEOUT_S = 10.0
DEFAULT_PORT = 8081
DEFAULT_HOST = "0.0.0.0"  # noqa: S104

# Longest slice of an error body carried into a failure cause.
MAX_CAUSE_LENGTH = 200

METRIC_PREFIX = "owm"
