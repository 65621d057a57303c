"""Domain models for course calendar integration."""

from course_calendar.models.event import (
    AuthUrlData,
    AuthUrlResponse,
    CalendarEvent,
    CreateEventRequest,
    EventData,
    EventKind,
    EventResponse,
    EventTime,
    MessageResponse,
    MilestonesData,
    MilestonesResponse,
    ScheduleData,
    ScheduleResponse,
)

__all__ = [
    # Event
    "CalendarEvent",
    "EventTime",
    "EventKind",
    "CreateEventRequest",
    # Responses
    "MessageResponse",
    "MilestonesData",
    "MilestonesResponse",
    "ScheduleData",
    "ScheduleResponse",
    "EventData",
    "EventResponse",
    "AuthUrlData",
    "AuthUrlResponse",
]
