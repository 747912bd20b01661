"""Fixed-interval fetch loop feeding the reading store."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import math
from typing import Protocol

from owm_exporter.models.coordinates import Coordinates
from owm_exporter.models.outcome import ErrorDetail, ErrorKind, Failure, FetchOutcome, Success
from owm_exporter.models.units import UnitSystem
from owm_exporter.state.store import ReadingStore

_logger = logging.getLogger(__name__)


class OutcomeSource(Protocol):
    async def fetch(self, coordinates: Coordinates, units: UnitSystem) -> FetchOutcome:
        ...


class Poller:
    """Fetches the current reading on a fixed wall-clock cadence.

    The first fetch runs as soon as the poller starts. Every outcome,
    success or failure, overwrites the store; an unexpected exception
    from the client is recorded as an ``internal`` failure and the loop
    carries on. If a fetch overruns one or
    more ticks the missed ticks are skipped, so fetches never overlap and
    a slow response can never overwrite a newer one.
    """

    def __init__(
        self,
        client: OutcomeSource,
        store: ReadingStore,
        coordinates: Coordinates,
        units: UnitSystem,
        *,
        interval: float,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self._client = client
        self._store = store
        self._coordinates = coordinates
        self._units = units
        self._interval = interval
        self._fetch_lock = asyncio.Lock()
        self._task: asyncio.Task[None] | None = None
        self.cycles = 0
        self.skipped_ticks = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def fetching(self) -> bool:
        return self._fetch_lock.locked()

    def _now(self) -> float:
        return asyncio.get_running_loop().time()

    async def run_once(self) -> FetchOutcome | None:
        """Run one fetch cycle and store its outcome.

        Returns ``None`` without fetching when another cycle is still in
        flight.
        """
        if self._fetch_lock.locked():
            self.skipped_ticks += 1
            _logger.debug("Fetch already in flight for %s, skipping", self._coordinates)
            return None

        async with self._fetch_lock:
            try:
                outcome = await self._client.fetch(self._coordinates, self._units)
            except Exception as exc:
                _logger.exception("Unexpected error fetching weather for %s", self._coordinates)
                outcome = Failure(error=ErrorDetail(kind=ErrorKind.INTERNAL, cause=f"{type(exc).__name__}: {exc}"))
            self._store.write(outcome)
            self.cycles += 1

        if isinstance(outcome, Success):
            _logger.info("reading: %s", outcome.reading.summary())
            _logger.debug("full reading: %r", outcome.reading)
        else:
            error = outcome.error
            _logger.error(
                "owm api error (%s, status=%s): %s",
                error.kind,
                error.status_code,
                error.cause,
            )
        return outcome

    async def run(self) -> None:
        """Fetch forever; cancel the calling task to stop."""
        next_tick = self._now()
        while True:
            await self.run_once()

            next_tick += self._interval
            now = self._now()
            if now > next_tick:
                missed = math.ceil((now - next_tick) / self._interval)
                self.skipped_ticks += missed
                next_tick += missed * self._interval
                _logger.warning(
                    "Fetch overran the %.1fs interval, skipped %d tick(s)",
                    self._interval,
                    missed,
                )
            await asyncio.sleep(max(0.0, next_tick - now))

    def start(self) -> asyncio.Task[None]:
        """Start the fetch loop as a background task on the running loop."""
        if self.running:
            raise RuntimeError("poller already running")
        _logger.info(
            "Polling %s (%s units) every %.1fs",
            self._coordinates,
            self._units,
            self._interval,
        )
        self._task = asyncio.get_running_loop().create_task(self.run(), name="owm-poller")
        return self._task

    async def stop(self) -> None:
        """Cancel the loop and any in-flight fetch. The store keeps its last value."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
