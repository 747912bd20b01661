"""Async client for the OpenWeatherMap current-weather API."""

from __future__ import annotations

import json
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from owm_exporter._constants import DEFAULT_REQUEST_TIMEOUT_S, MAX_CAUSE_LENGTH, OWM_API_ENDPOINT
from owm_exporter._transport import AiohttpTransport, HttpResponse, Transport
from owm_exporter.exceptions import OwmError, OwmParseError, OwmTransportError, OwmUpstreamError
from owm_exporter.models.coordinates import Coordinates
from owm_exporter.models.outcome import ErrorDetail, ErrorKind, Failure, FetchOutcome, Success
from owm_exporter.models.reading import Reading
from owm_exporter.models.units import UnitSystem

_logger = logging.getLogger(__name__)


def build_query(api_key: str, coordinates: Coordinates, units: UnitSystem) -> dict[str, str]:
    """Query parameters for one current-weather request."""
    query = {
        "lat": str(coordinates.latitude),
        "lon": str(coordinates.longitude),
        "appid": api_key,
    }
    if units.api_param is not None:
        query["units"] = units.api_param
    return query


def _upstream_cause(response: HttpResponse) -> str:
    """Prefer the provider's ``message`` field, then the raw body, then the reason phrase."""
    text = response.text.strip()
    if text:
        try:
            body = json.loads(text)
        except json.JSONDecodeError:
            body = None
        if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
            return str(body["message"])
        return text[:MAX_CAUSE_LENGTH]
    return response.reason or f"HTTP {response.status}"


def parse_reading(text: str) -> Reading:
    """Parse a current-weather JSON body.

    Raises :class:`OwmParseError` for invalid JSON or a payload missing
    required fields or carrying them with the wrong JSON type.
    """
    try:
        payload: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise OwmParseError(f"invalid JSON in weather response: {exc}") from exc
    if not isinstance(payload, dict):
        raise OwmParseError(f"expected a JSON object, got {type(payload).__name__}")
    try:
        return Reading.model_validate(payload, strict=True)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise OwmParseError(f"unexpected weather payload: {problems}") from exc


def outcome_from_error(exc: OwmError) -> Failure:
    """Capture a per-fetch exception as outcome data."""
    if isinstance(exc, OwmUpstreamError):
        detail = ErrorDetail(kind=ErrorKind.UPSTREAM, cause=str(exc), status_code=exc.status_code)
    elif isinstance(exc, OwmParseError):
        detail = ErrorDetail(kind=ErrorKind.PARSE, cause=str(exc))
    else:
        detail = ErrorDetail(kind=ErrorKind.TRANSPORT, cause=str(exc))
    return Failure(error=detail)


class WeatherClient:
    """Async client for the current-weather endpoint.

    Usage::

        async with WeatherClient(api_key) as client:
            outcome = await client.fetch(coordinates, UnitSystem.METRIC)

    A ``transport`` can be passed instead of an HTTP session; tests use
    this to substitute canned responses.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = OWM_API_ENDPOINT,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_S,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        if transport is None and session is not None:
            self._transport = AiohttpTransport(session, timeout=timeout)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> WeatherClient:
        if self._transport is None:
            self._http_session = aiohttp.ClientSession()
            self._transport = AiohttpTransport(self._http_session, timeout=self._timeout)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise OwmError("Client not initialized. Use 'async with WeatherClient(...) as client:'")
        return self._transport

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get_current(self, coordinates: Coordinates, units: UnitSystem) -> Reading:
        """Fetch the current reading, raising on any failure.

        Raises
        ------
        OwmTransportError
            No response was received (timeout, connection error).
        OwmUpstreamError
            The API answered with a non-2xx status.
        OwmParseError
            The body is not a valid current-weather payload.
        """
        transport = self._require_transport()
        query = build_query(self._api_key, coordinates, units)
        response = await transport.get(self._base_url, query)
        _logger.debug("Weather API answered HTTP %s (%d bytes)", response.status, len(response.text))

        if not 200 <= response.status < 300:
            raise OwmUpstreamError(
                _upstream_cause(response),
                status_code=response.status,
                url=self._base_url,
            )
        return parse_reading(response.text)

    async def fetch(self, coordinates: Coordinates, units: UnitSystem) -> FetchOutcome:
        """Fetch the current reading with every failure captured as a :class:`Failure`.

        Issues exactly one request; retrying is left to the caller's
        schedule.
        """
        try:
            reading = await self.get_current(coordinates, units)
        except (OwmTransportError, OwmUpstreamError, OwmParseError) as exc:
            return outcome_from_error(exc)
        return Success(reading=reading)
