"""Custom exception hierarchy for owm_exporter."""

from __future__ import annotations


class OwmError(Exception):
    """Base exception for all owm_exporter errors."""


class OwmConfigError(OwmError):
    """Invalid or missing configuration.

    Only raised at startup; the poller and HTTP server are never created
    from a configuration that fails validation.
    """


class OwmTransportError(OwmError):
    """Network-level failure (timeout, connection refused, TLS)."""

    def __init__(self, message: str, *, url: str = "") -> None:
        self.url = url
        super().__init__(message)


class OwmUpstreamError(OwmError):
    """The weather API answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, url: str = "") -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class OwmParseError(OwmError):
    """A 2xx response whose body is not a valid current-weather payload."""
