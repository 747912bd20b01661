"""HTTP transport for the current-weather API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import aiohttp

from owm_exporter._constants import USER_AGENT
from owm_exporter.exceptions import OwmParseError, OwmTransportError

_logger = logging.getLogger(__name__)

_REDACTED_PARAMS = frozenset({"appid"})


@dataclass(frozen=True, slots=True)
class HttpResponse:
    """Status, reason phrase and decoded body of a completed exchange."""

    status: int
    reason: str
    text: str


class Transport(Protocol):
    """Structural transport interface used by :class:`WeatherClient`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`AiohttpTransport`) concrete.
    Implementations raise :class:`OwmTransportError` when no response
    was received, :class:`OwmParseError` when a 2xx body cannot be decoded,
    and return every other received response, whatever its status.
    """

    async def get(self, url: str, params: Mapping[str, str]) -> HttpResponse:
        ...


def _decode(raw: bytes, charset: str, *, status: int, url: str) -> str:
    """Decode a body; undecodable 2xx bodies are parse errors, error bodies are decoded lossily."""
    try:
        return raw.decode(charset)
    except (UnicodeDecodeError, LookupError) as exc:
        if 200 <= status < 300:
            raise OwmParseError(f"Response from {url} is not valid {charset}: {exc}") from exc
        return raw.decode("utf-8", errors="replace")


def _loggable(params: Mapping[str, str]) -> dict[str, str]:
    return {key: ("***" if key in _REDACTED_PARAMS else value) for key, value in params.items()}


class AiohttpTransport:
    """GET requests over a shared :class:`aiohttp.ClientSession` with a bounded timeout."""

    def __init__(self, http_session: aiohttp.ClientSession, *, timeout: float) -> None:
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def get(self, url: str, params: Mapping[str, str]) -> HttpResponse:
        _logger.debug("GET %s params=%s", url, _loggable(params))

        headers = {"accept": "application/json", "user-agent": USER_AGENT}
        try:
            async with self._http.get(url, params=dict(params), headers=headers, timeout=self._timeout) as resp:
                raw = await resp.read()
                status, reason, charset = resp.status, resp.reason or "", resp.charset or "utf-8"
        except TimeoutError as exc:
            raise OwmTransportError(
                f"Request to {url} timed out after {self._timeout.total}s",
                url=url,
            ) from exc
        except aiohttp.ClientError as exc:
            raise OwmTransportError(
                f"Request to {url} failed: {exc}",
                url=url,
            ) from exc

        return HttpResponse(status=status, reason=reason, text=_decode(raw, charset, status=status, url=url))
