from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class Outcome(str, Enum):
    FOUND = "found"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


class FailureReason(str, Enum):
    NETWORK = "network"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """What a fetcher hands back instead of raising.

    ``EMPTY`` is for list fetches with nothing to show and ``NOT_FOUND`` for
    single lookups. ``failure`` says why, when a remote error caused it; an
    empty list that the CMS really returned has no failure.
    """

    outcome: Outcome
    value: Optional[T] = None
    failure: Optional[FailureReason] = None

    @classmethod
    def found(cls, value: T) -> "FetchResult[T]":
        return cls(Outcome.FOUND, value)

    @classmethod
    def empty(cls, failure: FailureReason | None = None) -> "FetchResult[T]":
        return cls(Outcome.EMPTY, None, failure)

    @classmethod
    def not_found(cls, failure: FailureReason = FailureReason.NOT_FOUND) -> "FetchResult[T]":
        return cls(Outcome.NOT_FOUND, None, failure)

    @property
    def is_found(self) -> bool:
        return self.outcome is Outcome.FOUND

    @property
    def failed(self) -> bool:
        return self.failure is not None and self.failure is not FailureReason.NOT_FOUND


def items_of(result: "FetchResult[List[T]]") -> List[T]:
    """The list inside a list fetch, or ``[]`` for any other outcome."""
    if result.is_found and result.value:
        return list(result.value)
    return []
