"""Result of one poll cycle.

A :data:`FetchOutcome` is either :class:`Success` carrying a complete
:class:`~owm_exporter.models.reading.Reading` or :class:`Failure`
carrying an :class:`ErrorDetail`. The ``kind`` field discriminates the
two when validating serialized data.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import Field

from owm_exporter.models._base import OwmBaseModel
from owm_exporter.models.reading import Reading


class ErrorKind(StrEnum):
    TRANSPORT = "transport"
    UPSTREAM = "upstream"
    PARSE = "parse"
    NO_DATA = "no_data"
    INTERNAL = "internal"


class ErrorDetail(OwmBaseModel):
    """Why the latest fetch did not produce a reading.

    ``status_code`` is only set for :attr:`ErrorKind.UPSTREAM`.
    """

    kind: ErrorKind
    cause: str
    status_code: int | None = None


class Success(OwmBaseModel):
    kind: Literal["success"] = "success"
    reading: Reading

    @property
    def ok(self) -> bool:
        return True


class Failure(OwmBaseModel):
    kind: Literal["failure"] = "failure"
    error: ErrorDetail

    @property
    def ok(self) -> bool:
        return False


FetchOutcome = Annotated[Success | Failure, Field(discriminator="kind")]

NO_DATA = Failure(error=ErrorDetail(kind=ErrorKind.NO_DATA, cause="no data yet"))
"""Outcome held by a store before the first fetch completes."""
