"""Calendar integration module.

Provides integration with Google Calendar for course deadlines and the daily
agenda.

## Features

- List upcoming course milestones (keyword-classified)
- List today's schedule
- Create milestones and tasks with fixed reminders
- Delete events
- Build the Google consent URL

## Google Calendar API

Uses the Google Calendar API v3:
- https://developers.google.com/calendar/api/v3/reference

## Event Processing

1. Fetch events in a time window from the primary calendar
2. Filter milestones by course keywords (schedule is unfiltered)
3. Map provider events onto `CalendarEvent`
"""

from course_calendar.calendar.classifier import (
    EventClassifier,
    is_relevant,
    map_event,
)
from course_calendar.calendar.formatter import (
    build_provider_payload,
    render_display_time,
)
from course_calendar.calendar.google_calendar import (
    CalendarProviderError,
    GoogleCalendarClient,
)
from course_calendar.calendar.service import CalendarService

__all__ = [
    "GoogleCalendarClient",
    "CalendarProviderError",
    "EventClassifier",
    "is_relevant",
    "map_event",
    "build_provider_payload",
    "render_display_time",
    "CalendarService",
]
