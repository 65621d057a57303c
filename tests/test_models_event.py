"""Tests for event models."""

import pytest
from pydantic import ValidationError

from course_calendar.models.event import CalendarEvent, CreateEventRequest, EventTime


class TestCreateEventRequest:
    """Tests for create request validation."""

    def test_accepts_camel_case(self):
        request = CreateEventRequest.model_validate(
            {"title": "Lab 3", "dueDate": "2024-12-25", "dueTime": "14:00", "isAllDay": False}
        )
        assert request.due_date == "2024-12-25"
        assert request.due_time == "14:00"
        assert request.is_all_day is False

    def test_defaults(self):
        request = CreateEventRequest(title="Lab 3", due_date="2024-12-25")
        assert request.description is None
        assert request.due_time is None
        assert request.is_all_day is False

    @pytest.mark.parametrize("title", ["", "x" * 101])
    def test_title_length(self, title: str):
        with pytest.raises(ValidationError):
            CreateEventRequest(title=title, due_date="2024-12-25")

    def test_title_boundaries(self):
        CreateEventRequest(title="x", due_date="2024-12-25")
        CreateEventRequest(title="x" * 100, due_date="2024-12-25")

    def test_description_length(self):
        CreateEventRequest(title="x", description="d" * 500, due_date="2024-12-25")
        with pytest.raises(ValidationError):
            CreateEventRequest(title="x", description="d" * 501, due_date="2024-12-25")

    @pytest.mark.parametrize("due_date", ["2024/12/25", "25-12-2024", "2024-12-5", "tomorrow"])
    def test_invalid_date_format(self, due_date: str):
        with pytest.raises(ValidationError):
            CreateEventRequest(title="x", due_date=due_date)

    @pytest.mark.parametrize("due_time", ["24:00", "12:60", "2pm", "14:00:00"])
    def test_invalid_time_format(self, due_time: str):
        with pytest.raises(ValidationError):
            CreateEventRequest(title="x", due_date="2024-12-25", due_time=due_time)

    def test_single_digit_hour_is_padded(self):
        request = CreateEventRequest(title="x", due_date="2024-12-25", due_time="9:05")
        assert request.due_time == "09:05"

    def test_dump_uses_wire_names(self):
        request = CreateEventRequest(title="x", due_date="2024-12-25", due_time="09:05")
        assert request.model_dump(by_alias=True, exclude_none=True) == {
            "title": "x",
            "dueDate": "2024-12-25",
            "dueTime": "09:05",
            "isAllDay": False,
        }


class TestCalendarEvent:
    """Tests for the event model."""

    def test_parses_wire_format(self):
        event = CalendarEvent.model_validate(
            {
                "id": "e1",
                "summary": "Quiz",
                "start": {"dateTime": "2024-12-21T10:00:00Z"},
                "end": {"dateTime": "2024-12-21T11:00:00Z"},
                "htmlLink": "https://calendar.google.com/event?eid=e1",
                "created": "",
                "updated": "",
            }
        )
        assert event.html_link == "https://calendar.google.com/event?eid=e1"
        assert event.start.date_time == "2024-12-21T10:00:00Z"
        assert not event.start.is_all_day

    def test_dump_drops_absent_time_fields(self):
        event = CalendarEvent(id="e1", start=EventTime(date="2024-12-23"))
        dumped = event.model_dump(by_alias=True, exclude_none=True)
        assert dumped["start"] == {"date": "2024-12-23"}
        assert dumped["end"] == {}
        assert dumped["htmlLink"] == ""
