"""FastAPI application and routes.

This module provides the REST API for the course calendar service.

## API Structure

- GET /calendar/milestones - Upcoming course milestones
- GET /calendar/schedule - Today's events
- POST /calendar/milestones - Create a milestone
- POST /calendar/tasks - Create a task
- DELETE /calendar/events/{event_id} - Delete an event
- GET /calendar/auth-url - Google consent URL
- GET /health - Health check

## Authentication

All calendar endpoints except ``/auth-url`` require the user's Google access
token in an ``Authorization: Bearer`` header. Requests without one answer
401 ``{"message": "Access token required for calendar access"}``.
"""

from course_calendar.api.app import create_app

__all__ = ["create_app"]
