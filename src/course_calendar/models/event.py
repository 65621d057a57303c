"""Event models for calendar integration.

Attribute names are snake_case in Python and camelCase on the wire, matching
the field names the Google Calendar API and the mobile client use
(``htmlLink``, ``dateTime``, ``dueDate``, ``isAllDay``). Both spellings are
accepted when parsing.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

NO_TITLE = "No Title"


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class EventKind(str, Enum):
    """Tag deciding the summary prefix of a created event."""

    MILESTONE = "milestone"
    TASK = "task"


class EventTime(CamelModel):
    """Start or end point of an event.

    Well-formed provider data sets exactly one of the two fields: ``date``
    for whole-day events, ``date_time`` for timed ones. Nothing here enforces
    that, so consumers must cope with neither or both being set.
    """

    date: str | None = None
    date_time: str | None = None

    @property
    def is_all_day(self) -> bool:
        return self.date_time is None and self.date is not None


class CalendarEvent(CamelModel):
    """A single scheduled item, projected from provider state."""

    id: str = ""
    summary: str = NO_TITLE
    description: str = ""
    start: EventTime = Field(default_factory=EventTime)
    end: EventTime = Field(default_factory=EventTime)
    location: str = ""
    html_link: str = ""
    created: str = ""
    updated: str = ""


class CreateEventRequest(CamelModel):
    """Request body for creating a milestone or a task."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    due_date: str = Field(..., pattern=DATE_PATTERN, description="YYYY-MM-DD")
    due_time: str | None = Field(
        default=None, pattern=TIME_PATTERN, description="HH:MM, 24-hour"
    )
    is_all_day: bool | None = False

    @field_validator("due_time")
    @classmethod
    def pad_hour(cls, v: str | None) -> str | None:
        """Normalize "9:30" to "09:30" so it forms a valid RFC3339 time."""
        if v is None:
            return None
        hour, minute = v.split(":")
        return f"{int(hour):02d}:{minute}"


# -----------------------------------------------------------------------------
# Response envelopes
# -----------------------------------------------------------------------------


class MessageResponse(CamelModel):
    """Body of responses that carry only a message (errors, deletes)."""

    message: str


class MilestonesData(CamelModel):
    milestones: list[CalendarEvent]


class MilestonesResponse(MessageResponse):
    data: MilestonesData | None = None


class ScheduleData(CamelModel):
    events: list[CalendarEvent]


class ScheduleResponse(MessageResponse):
    data: ScheduleData | None = None


class EventData(CamelModel):
    event: CalendarEvent


class EventResponse(MessageResponse):
    data: EventData | None = None


class AuthUrlData(CamelModel):
    auth_url: str


class AuthUrlResponse(MessageResponse):
    data: AuthUrlData | None = None
