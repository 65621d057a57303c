"""Pytest fixtures for course calendar tests.

This module provides test fixtures that ensure:
1. No external API calls are made (Google Calendar, OAuth)
2. Time-dependent pipelines run against a fixed clock
3. Isolated test environment with controlled configuration
"""

import os
from datetime import date, datetime
from unittest.mock import MagicMock
from zoneinfo import ZoneInfo

import pytest

# Set test environment BEFORE importing application modules
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-client-id")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-client-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from course_calendar.calendar.google_calendar import GoogleCalendarClient
from course_calendar.calendar.service import CalendarService
from course_calendar.config import Settings

VANCOUVER = ZoneInfo("America/Vancouver")
FIXED_NOW = datetime(2024, 12, 20, 15, 30, tzinfo=VANCOUVER)
FIXED_TODAY = date(2024, 12, 20)


# =============================================================================
# Test Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset cached settings and services before each test."""
    from course_calendar.api.routes.calendar import get_calendar_service
    from course_calendar.config import get_settings

    get_settings.cache_clear()
    get_calendar_service.cache_clear()
    yield
    get_settings.cache_clear()
    get_calendar_service.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings pinned to a known timezone."""
    return Settings(timezone="America/Vancouver", google_client_id="test-client-id")


@pytest.fixture
def google_client() -> MagicMock:
    """Stand-in for the Google Calendar adapter."""
    client = MagicMock(spec=GoogleCalendarClient)
    client.list_events.return_value = []
    return client


@pytest.fixture
def client_factory(google_client: MagicMock) -> MagicMock:
    """Factory that hands out the stand-in adapter."""
    return MagicMock(return_value=google_client)


@pytest.fixture
def service(settings: Settings, client_factory: MagicMock) -> CalendarService:
    """Calendar service over the stand-in adapter with a fixed clock."""
    return CalendarService(
        settings=settings,
        client_factory=client_factory,
        clock=lambda: FIXED_NOW,
    )


# =============================================================================
# Sample Provider Data
# =============================================================================


def make_google_event(
    event_id: str,
    summary: str | None,
    description: str | None = None,
    start: dict | None = None,
    end: dict | None = None,
) -> dict:
    """Build a Google Calendar event resource."""
    data = {
        "id": event_id,
        "start": start or {"dateTime": "2024-12-21T10:00:00-08:00"},
        "end": end or {"dateTime": "2024-12-21T11:00:00-08:00"},
        "htmlLink": f"https://calendar.google.com/event?eid={event_id}",
        "created": "2024-12-01T09:00:00.000Z",
        "updated": "2024-12-02T09:00:00.000Z",
    }
    if summary is not None:
        data["summary"] = summary
    if description is not None:
        data["description"] = description
    return data


@pytest.fixture
def upcoming_events() -> list[dict]:
    """A month of mixed events in chronological order."""
    return [
        make_google_event("e1", "CPEN 321 M3 deliverable"),
        make_google_event("e2", "Lunch with Sam"),
        make_google_event("e3", "Team sync", description="Prepare the project demo"),
        make_google_event("e4", None, description="exam review"),
        make_google_event("e5", "Final Exam", start={"date": "2024-12-23"}, end={"date": "2024-12-24"}),
        make_google_event("e6", "Dentist"),
        make_google_event("e7", "Quiz 4"),
    ]
