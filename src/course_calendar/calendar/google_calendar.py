"""Google Calendar API client.

Thin adapter over the Google Calendar API v3 used by the calendar service:
- List events in a time window
- Insert an event
- Delete an event

## API Documentation

https://developers.google.com/calendar/api/v3/reference

## Authentication

Every call is scoped to a bearer access token supplied by the caller. The
client never stores, refreshes, or persists credentials.

## Failures

Each method issues exactly one provider request and never retries. Any
transport, authentication, or provider-side error is raised as
`CalendarProviderError`; provider error codes are not disambiguated, apart
from delete treating an already-missing event as deleted.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import Error as GoogleApiError
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

# Provider statuses meaning the event is already gone
_GONE_STATUSES = frozenset({404, 410})


class CalendarProviderError(Exception):
    """Raised when a Google Calendar API call fails for any reason."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GoogleCalendarClient:
    """Client for Google Calendar API.

    Example:
        ```python
        client = GoogleCalendarClient(access_token)

        # Events in a window, chronological
        items = client.list_events(time_min, time_max, max_results=20)

        # Create and delete
        created = client.insert_event({"summary": "Task: Lab 3", ...})
        client.delete_event(created["id"])
        ```
    """

    def __init__(self, access_token: str, calendar_id: str = "primary"):
        """Initialize the client.

        Args:
            access_token: OAuth access token with a calendar scope
            calendar_id: Calendar to operate on ('primary' for the user's main one)
        """
        self.calendar_id = calendar_id
        self._credentials = Credentials(token=access_token)
        try:
            self._service = build(
                "calendar",
                "v3",
                credentials=self._credentials,
                cache_discovery=False,
            )
        except (GoogleApiError, GoogleAuthError, OSError) as e:
            raise CalendarProviderError(f"Failed to build calendar service: {e}") from e

    def list_events(
        self,
        time_min: datetime,
        time_max: datetime,
        max_results: int = 250,
    ) -> list[dict[str, Any]]:
        """List raw events starting in ``[time_min, time_max)``.

        Recurring events are expanded into single instances and results are
        ordered by start time. Only the first page is read, so ``max_results``
        bounds the result.

        Args:
            time_min: Lower bound (inclusive) on event end time, timezone-aware
            time_max: Upper bound (exclusive) on event start time, timezone-aware
            max_results: Maximum events to return

        Returns:
            Raw event resources as returned by the API

        Raises:
            CalendarProviderError: If the request fails
        """
        params: dict[str, Any] = {
            "calendarId": self.calendar_id,
            "timeMin": time_min.isoformat(),
            "timeMax": time_max.isoformat(),
            "maxResults": max_results,
            "singleEvents": True,
            "orderBy": "startTime",
        }

        result = self._execute("list events", self._service.events().list(**params))
        return list(result.get("items") or [])

    def insert_event(self, body: dict[str, Any]) -> dict[str, Any]:
        """Insert an event into the calendar.

        Args:
            body: Event resource to create

        Returns:
            The created event resource

        Raises:
            CalendarProviderError: If the request fails or returns nothing
        """
        result = self._execute(
            "insert event",
            self._service.events().insert(calendarId=self.calendar_id, body=body),
        )
        if not result:
            raise CalendarProviderError("Provider returned no event for insert")
        return result

    def delete_event(self, event_id: str) -> None:
        """Delete an event by ID.

        Deleting an event that no longer exists is treated as success.

        Args:
            event_id: Event ID

        Raises:
            CalendarProviderError: If the request fails
        """
        try:
            self._execute(
                "delete event",
                self._service.events().delete(
                    calendarId=self.calendar_id, eventId=event_id
                ),
            )
        except CalendarProviderError as e:
            if e.status_code in _GONE_STATUSES:
                logger.info(f"Event {event_id} already deleted")
                return
            raise

    def _execute(self, action: str, request: Any) -> dict[str, Any]:
        """Execute a prepared API request once, normalizing failures."""
        try:
            result = request.execute(num_retries=0)
        except HttpError as e:
            raise CalendarProviderError(
                f"Failed to {action}: HTTP {e.resp.status}",
                status_code=e.resp.status,
            ) from e
        except (GoogleApiError, GoogleAuthError, OSError) as e:
            raise CalendarProviderError(f"Failed to {action}: {e}") from e

        # Delete answers with an empty body
        if result is None or result == "":
            return {}
        if not isinstance(result, dict):
            raise CalendarProviderError(f"Failed to {action}: malformed response")
        return result
