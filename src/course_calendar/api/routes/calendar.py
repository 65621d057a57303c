"""Calendar routes.

Handles upcoming milestones, today's schedule, event creation and deletion,
and the consent URL. Every route but ``/auth-url`` requires the Google access
token as a bearer credential.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, Depends, Query, status

from course_calendar.auth.dependencies import require_access_token
from course_calendar.calendar.service import CalendarService
from course_calendar.models.event import (
    AuthUrlData,
    AuthUrlResponse,
    CreateEventRequest,
    EventData,
    EventResponse,
    MessageResponse,
    MilestonesData,
    MilestonesResponse,
    ScheduleData,
    ScheduleResponse,
)

router = APIRouter()


@lru_cache
def get_calendar_service() -> CalendarService:
    """Get the shared calendar service (stateless, safe to reuse)."""
    return CalendarService()


@router.get(
    "/milestones",
    response_model=MilestonesResponse,
    response_model_exclude_none=True,
)
async def get_upcoming_milestones(
    max_results: int | None = Query(default=None, ge=1, le=50, alias="maxResults"),
    access_token: str = Depends(require_access_token),
    service: CalendarService = Depends(get_calendar_service),
) -> MilestonesResponse:
    """List upcoming course milestones from the user's calendar."""
    milestones = await service.get_upcoming_milestones(access_token, max_results)
    return MilestonesResponse(
        message="Upcoming milestones retrieved successfully",
        data=MilestonesData(milestones=milestones),
    )


@router.get(
    "/schedule",
    response_model=ScheduleResponse,
    response_model_exclude_none=True,
)
async def get_todays_schedule(
    access_token: str = Depends(require_access_token),
    service: CalendarService = Depends(get_calendar_service),
) -> ScheduleResponse:
    """List every event of the current day."""
    events = await service.get_todays_schedule(access_token)
    return ScheduleResponse(
        message="Today's schedule retrieved successfully",
        data=ScheduleData(events=events),
    )


@router.post(
    "/milestones",
    response_model=EventResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_milestone(
    data: CreateEventRequest,
    access_token: str = Depends(require_access_token),
    service: CalendarService = Depends(get_calendar_service),
) -> EventResponse:
    """Create a course milestone."""
    event = await service.create_milestone(access_token, data)
    return EventResponse(
        message="Milestone created successfully",
        data=EventData(event=event),
    )


@router.post(
    "/tasks",
    response_model=EventResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_task(
    data: CreateEventRequest,
    access_token: str = Depends(require_access_token),
    service: CalendarService = Depends(get_calendar_service),
) -> EventResponse:
    """Create a task."""
    event = await service.create_task(access_token, data)
    return EventResponse(
        message="Task created successfully",
        data=EventData(event=event),
    )


@router.delete("/events/{event_id}", response_model=MessageResponse)
async def delete_event(
    event_id: str,
    access_token: str = Depends(require_access_token),
    service: CalendarService = Depends(get_calendar_service),
) -> MessageResponse:
    """Delete an event."""
    await service.delete_event(access_token, event_id)
    return MessageResponse(message="Event deleted successfully")


@router.get(
    "/auth-url",
    response_model=AuthUrlResponse,
    response_model_exclude_none=True,
)
async def get_auth_url(
    service: CalendarService = Depends(get_calendar_service),
) -> AuthUrlResponse:
    """Get the Google consent URL for calendar access."""
    return AuthUrlResponse(
        message="Authorization URL generated successfully",
        data=AuthUrlData(auth_url=service.get_authorization_url()),
    )
