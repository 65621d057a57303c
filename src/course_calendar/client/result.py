"""Result type returned by the calendar repository.

A repository call never raises for expected failures. It returns either
`Success` carrying the payload or `Failure` carrying a `FailureKind`, so
callers branch on the kind instead of parsing messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from course_calendar.errors import FailureKind

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful call with its payload."""

    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed call.

    Attributes:
        kind: Failure category
        message: Human-readable message, from the server when it sent one
        status_code: HTTP status, when a response was received
        cause: Underlying exception (transport fault or malformed payload)
    """

    kind: FailureKind
    message: str
    status_code: int | None = None
    cause: BaseException | None = None

    @property
    def is_success(self) -> bool:
        return False


Result = Union[Success[T], Failure]
