"""Error taxonomy shared by the calendar service and its client.

| Kind               | Raised by          | HTTP | Meaning                              |
|--------------------|--------------------|------|--------------------------------------|
| MISSING_CREDENTIAL | service / client   | 401  | No bearer token was supplied         |
| UPSTREAM_FAILURE   | service / client   | 500  | Google Calendar call failed          |
| TRANSPORT_FAULT    | client only        | -    | Timeout, DNS, connect or I/O failure |

Request validation failures are rejected by the API layer before the
service is invoked and never carry one of these kinds.
"""

from __future__ import annotations

from enum import Enum

MISSING_CREDENTIAL_MESSAGE = "Access token required for calendar access"


class FailureKind(str, Enum):
    """Category of a failed calendar operation."""

    MISSING_CREDENTIAL = "missing_credential"
    UPSTREAM_FAILURE = "upstream_failure"
    TRANSPORT_FAULT = "transport_fault"


class CalendarServiceError(Exception):
    """Base exception for calendar service errors."""

    kind: FailureKind = FailureKind.UPSTREAM_FAILURE
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingCredentialError(CalendarServiceError):
    """Raised when an operation needing a bearer token gets none."""

    kind = FailureKind.MISSING_CREDENTIAL
    status_code = 401

    def __init__(self, message: str = MISSING_CREDENTIAL_MESSAGE):
        super().__init__(message)


class UpstreamFailureError(CalendarServiceError):
    """Raised when the calendar provider call fails.

    The message names the operation; the provider error is kept as
    ``__cause__`` for logs and never sent to callers.
    """

    kind = FailureKind.UPSTREAM_FAILURE
    status_code = 500
