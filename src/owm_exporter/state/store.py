"""Single-slot store for the latest fetch outcome.

This is the only component holding state shared between the poller
and the scrape handlers.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from owm_exporter.models.outcome import NO_DATA, Failure, FetchOutcome, Success


def _utcnow() -> datetime:
    return datetime.now(UTC)


class StoredOutcome(BaseModel):
    """The current outcome together with its bookkeeping timestamps."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: Success | Failure
    written_at: datetime | None = None
    last_success_at: datetime | None = None


class ReadingStore:
    """Holds exactly one current :data:`FetchOutcome`.

    Outcomes are immutable, so a write is a reference swap of a frozen
    :class:`StoredOutcome` under a lock and readers always see one whole
    write. The lock is never held across I/O.
    """

    def __init__(self, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._current = StoredOutcome(outcome=NO_DATA)

    def write(self, outcome: FetchOutcome) -> None:
        """Replace the current outcome, discarding the previous one."""
        if not isinstance(outcome, (Success, Failure)):
            raise TypeError(f"expected Success or Failure, got {type(outcome).__name__}")
        now = self._clock()
        with self._lock:
            last_success_at = now if outcome.ok else self._current.last_success_at
            self._current = StoredOutcome(outcome=outcome, written_at=now, last_success_at=last_success_at)

    def read(self) -> FetchOutcome:
        """Current outcome; :data:`NO_DATA` until the first write."""
        with self._lock:
            return self._current.outcome

    def snapshot(self) -> StoredOutcome:
        """Current outcome with the times it, and the last success, were written."""
        with self._lock:
            return self._current
