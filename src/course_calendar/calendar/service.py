"""Calendar service.

Single entry point behind the HTTP routes. Every operation except
`get_authorization_url` needs the caller's Google access token and runs one
provider call through `GoogleCalendarClient`.

## Pipelines

- **Upcoming milestones**: events in ``[now, now + 1 month)``, over-fetched
  (50 by default) because classification happens after retrieval; untitled
  and non-matching events are dropped, then the list is truncated to the
  requested maximum. Provider order (by start time) is kept.
- **Today's schedule**: every event in ``[local midnight, next midnight)``,
  capped at 20, unfiltered.
- **Create milestone / task**: request -> event body -> insert -> mapped event.
- **Delete**: one provider delete, nothing returned.

## Errors

A missing token raises `MissingCredentialError`. Any provider failure is
logged and re-raised as `UpstreamFailureError` with an operation-specific
message.

The Google client library is blocking, so provider calls run on a worker
thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import calendar
import logging
from datetime import datetime, time, timedelta, tzinfo
from typing import Any, Callable, TypeVar
from zoneinfo import ZoneInfo

from course_calendar.auth.google import GoogleOAuth
from course_calendar.calendar.classifier import EventClassifier, map_event
from course_calendar.calendar.formatter import build_provider_payload
from course_calendar.calendar.google_calendar import (
    CalendarProviderError,
    GoogleCalendarClient,
)
from course_calendar.config import Settings, get_settings
from course_calendar.errors import MissingCredentialError, UpstreamFailureError
from course_calendar.models.event import CalendarEvent, CreateEventRequest, EventKind

logger = logging.getLogger(__name__)

T = TypeVar("T")

ClientFactory = Callable[[str, str], GoogleCalendarClient]


def add_months(moment: datetime, months: int) -> datetime:
    """Add calendar months, clamping the day to the target month's length."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Midnight of ``moment``'s day and of the following day, same zone."""
    start = datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)
    end = datetime.combine(moment.date() + timedelta(days=1), time.min, tzinfo=moment.tzinfo)
    return start, end


class CalendarService:
    """Course calendar operations over Google Calendar.

    Example:
        ```python
        service = CalendarService()

        milestones = await service.get_upcoming_milestones(access_token)
        event = await service.create_task(access_token, request)
        await service.delete_event(access_token, event.id)
        ```
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client_factory: ClientFactory | None = None,
        oauth: GoogleOAuth | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the service.

        Args:
            settings: Application settings (or the cached ones)
            client_factory: Builds a provider client from (access_token, calendar_id)
            oauth: Consent URL builder
            clock: Returns the current timezone-aware time
        """
        self.settings = settings or get_settings()
        self.classifier = EventClassifier(self.settings.course_tag)
        self._client_factory = client_factory or GoogleCalendarClient
        self._oauth = oauth
        self._clock = clock or self._local_now

    def _timezone(self) -> tzinfo | None:
        if self.settings.timezone:
            return ZoneInfo(self.settings.timezone)
        return None

    def _local_now(self) -> datetime:
        tz = self._timezone()
        if tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz)

    async def _run(
        self,
        access_token: str | None,
        failure_message: str,
        action: Callable[[GoogleCalendarClient], T],
    ) -> T:
        """Run one provider action on a worker thread, translating failures."""
        if not access_token:
            raise MissingCredentialError()

        def call() -> T:
            client = self._client_factory(access_token, self.settings.calendar_id)
            return action(client)

        try:
            return await asyncio.to_thread(call)
        except CalendarProviderError as e:
            logger.error(f"{failure_message}: {e}", exc_info=e)
            raise UpstreamFailureError(failure_message) from e

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    async def get_upcoming_milestones(
        self,
        access_token: str | None,
        max_results: int | None = None,
    ) -> list[CalendarEvent]:
        """Get upcoming course-related events.

        Args:
            access_token: Google access token
            max_results: Maximum milestones to return (default from settings)

        Returns:
            Matching events in chronological order
        """
        if max_results is None:
            max_results = self.settings.default_milestone_limit
        now = self._clock()
        time_max = add_months(now, self.settings.milestone_window_months)

        items = await self._run(
            access_token,
            "Failed to fetch upcoming milestones",
            lambda client: client.list_events(
                now, time_max, max_results=self.settings.milestone_fetch_limit
            ),
        )

        relevant = self.classifier.filter_events(items)
        logger.debug(
            f"{len(relevant)} of {len(items)} upcoming events are course-related"
        )
        return [map_event(item) for item in relevant[: max(max_results, 0)]]

    async def get_todays_schedule(self, access_token: str | None) -> list[CalendarEvent]:
        """Get every event of the current local day.

        Args:
            access_token: Google access token

        Returns:
            Today's events in chronological order
        """
        start, end = day_bounds(self._clock())

        items = await self._run(
            access_token,
            "Failed to fetch today's schedule",
            lambda client: client.list_events(
                start, end, max_results=self.settings.schedule_fetch_limit
            ),
        )
        return [map_event(item) for item in items]

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_milestone(
        self, access_token: str | None, request: CreateEventRequest
    ) -> CalendarEvent:
        """Create a milestone (summary prefixed with the course tag)."""
        return await self._create(access_token, request, EventKind.MILESTONE)

    async def create_task(
        self, access_token: str | None, request: CreateEventRequest
    ) -> CalendarEvent:
        """Create a task (summary prefixed with "Task: ")."""
        return await self._create(access_token, request, EventKind.TASK)

    async def _create(
        self,
        access_token: str | None,
        request: CreateEventRequest,
        kind: EventKind,
    ) -> CalendarEvent:
        body: dict[str, Any] = build_provider_payload(
            request, kind, course_tag=self.settings.course_tag
        )
        created = await self._run(
            access_token,
            f"Failed to create {kind.value}",
            lambda client: client.insert_event(body),
        )
        event = map_event(created)
        logger.info(f"Created {kind.value} {event.id}")
        return event

    async def delete_event(self, access_token: str | None, event_id: str) -> None:
        """Delete an event by ID."""
        await self._run(
            access_token,
            "Failed to delete event",
            lambda client: client.delete_event(event_id),
        )
        logger.info(f"Deleted event {event_id}")

    # -------------------------------------------------------------------------
    # Authorization
    # -------------------------------------------------------------------------

    def get_authorization_url(self) -> str:
        """Build the Google consent URL for calendar and profile access."""
        if self._oauth is None:
            self._oauth = GoogleOAuth(
                client_id=self.settings.google_client_id,
                redirect_uri=self.settings.google_redirect_uri,
                scopes=list(self.settings.google_calendar_scopes),
            )
        return self._oauth.get_authorization_url()
