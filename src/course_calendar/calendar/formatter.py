"""Event formatting.

Converts create requests into Google Calendar event bodies and renders an
event's start time for display.

## Time Resolution

Deadlines are modeled as points, not intervals:

| isAllDay | dueTime | start / end                                   |
|----------|---------|-----------------------------------------------|
| true     | any     | ``{"date": dueDate}``                         |
| false    | set     | ``{"dateTime": "<dueDate>T<dueTime>:00"}``    |
| false    | unset   | ``{"date": dueDate}`` (falls back to all-day) |

## Reminders

Every created event carries two popup reminders, 60 minutes and one day
(1440 minutes) before the start, replacing the calendar defaults.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any

from course_calendar.calendar.classifier import DEFAULT_COURSE_TAG
from course_calendar.models.event import CalendarEvent, CreateEventRequest, EventKind

logger = logging.getLogger(__name__)

REMINDER_MINUTES: tuple[int, ...] = (60, 1440)

NO_TIME_SPECIFIED = "No time specified"
INVALID_TIME = "Invalid time"

_CLOCK = re.compile(r"^\d{2}:\d{2}$")


def build_summary(title: str, kind: EventKind, course_tag: str = DEFAULT_COURSE_TAG) -> str:
    """Prefix a title according to the event kind."""
    if kind is EventKind.MILESTONE:
        return f"{course_tag} {title}"
    return f"Task: {title}"


def build_provider_payload(
    request: CreateEventRequest,
    kind: EventKind,
    course_tag: str = DEFAULT_COURSE_TAG,
) -> dict[str, Any]:
    """Build a Google Calendar event body from a create request.

    Args:
        request: Validated create request
        kind: Milestone or task
        course_tag: Course code used as milestone prefix

    Returns:
        Event resource ready for ``events.insert``
    """
    if request.is_all_day or not request.due_time:
        start: dict[str, str] = {"date": request.due_date}
        end: dict[str, str] = {"date": request.due_date}
    else:
        instant = f"{request.due_date}T{request.due_time}:00"
        start = {"dateTime": instant}
        end = {"dateTime": instant}

    return {
        "summary": build_summary(request.title, kind, course_tag),
        "description": request.description
        or f"Created via {course_tag} App - {kind.value}",
        "start": start,
        "end": end,
        "reminders": {
            "useDefault": False,
            "overrides": [
                {"method": "popup", "minutes": minutes} for minutes in REMINDER_MINUTES
            ],
        },
    }


def render_display_time(event: CalendarEvent, today: date | None = None) -> str:
    """Render an event's start as a short human-readable string.

    Timed events render as "Today at HH:MM" or "YYYY-MM-DD at HH:MM" using
    the wall-clock time written in the event; all-day events render as
    "Today (All day)" or "YYYY-MM-DD (All day)". Never raises: events with
    no start render as "No time specified" and unparseable ones as
    "Invalid time".

    Args:
        event: Event to render
        today: Reference date (defaults to the local current date)
    """
    try:
        today = today or date.today()
        start = event.start
        if start.date_time:
            date_part = date.fromisoformat(start.date_time[:10])
            time_part = start.date_time[11:16]
            if start.date_time[10:11] not in ("T", " ") or not _CLOCK.match(time_part):
                raise ValueError(f"Malformed dateTime: {start.date_time!r}")
            label = "Today" if date_part == today else date_part.isoformat()
            return f"{label} at {time_part}"
        if start.date:
            date_part = date.fromisoformat(start.date)
            label = "Today" if date_part == today else date_part.isoformat()
            return f"{label} (All day)"
        return NO_TIME_SPECIFIED
    except (ValueError, TypeError, AttributeError) as e:
        logger.debug(f"Cannot render time for event {getattr(event, 'id', '?')}: {e}")
        return INVALID_TIME
