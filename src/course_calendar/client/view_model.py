"""Calendar view model.

Owns the calendar screen's `CalendarUiState` and turns user actions into
repository calls and state transitions.

## Reconciliation

Mutations never patch the cached lists. After a successful create the
affected list is re-fetched; after a successful delete both lists are, since
the client cannot tell which one held the event. The re-fetch is not atomic
with the mutation: until it completes the lists may be stale, and if it
fails the stale lists stay on screen together with the error message.

## Concurrency

State is only changed through `dispatch`, which applies one reducer action
at a time under a lock. Overlapping user actions are not serialized beyond
that: two operations racing on the same loading flag leave whatever the
last one to finish wrote.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import date
from typing import Callable

from course_calendar.calendar.formatter import render_display_time
from course_calendar.client.repository import CalendarRepository
from course_calendar.client.result import Failure
from course_calendar.client.state import (
    Action,
    CalendarList,
    CalendarUiState,
    ErrorCleared,
    LoadFailed,
    LoadStarted,
    LoadSucceeded,
    MutationFailed,
    MutationStarted,
    MutationSucceeded,
    SuccessMessageCleared,
    reduce,
)
from course_calendar.models.event import CalendarEvent, CreateEventRequest

logger = logging.getLogger(__name__)

Subscriber = Callable[[CalendarUiState], None]


class CalendarViewModel:
    """State holder for the calendar screen.

    Example:
        ```python
        view_model = CalendarViewModel(repository)
        view_model.subscribe(render)

        await view_model.load_calendar_data()
        await view_model.create_task(CreateEventRequest(title="Lab 3", due_date="2024-12-25"))
        print(view_model.state.success_message)  # "Task created successfully!"
        ```
    """

    def __init__(
        self,
        repository: CalendarRepository,
        today: Callable[[], date] | None = None,
        max_milestones: int | None = None,
    ):
        """Initialize the view model.

        Args:
            repository: Calendar repository
            today: Returns the current local date, for display formatting
            max_milestones: Milestone limit sent to the server (server default if None)
        """
        self.repository = repository
        self.max_milestones = max_milestones
        self._today = today or date.today
        self._state = CalendarUiState()
        self._lock = threading.Lock()
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> CalendarUiState:
        return self._state

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a state listener; returns a function that removes it."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    def dispatch(self, action: Action) -> CalendarUiState:
        """Apply an action and notify subscribers of the new state."""
        with self._lock:
            self._state = reduce(self._state, action)
            state = self._state
        for subscriber in list(self._subscribers):
            subscriber(state)
        return state

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def load_calendar_data(self) -> None:
        """Load milestones and today's schedule concurrently."""
        await asyncio.gather(self.load_milestones(), self.load_schedule())

    async def load_milestones(self, announce: bool = True) -> bool:
        """Replace the milestone list with a fresh copy from the server.

        Args:
            announce: Set a success message when loading succeeds. Re-fetches
                after a mutation pass False, which also keeps errors raised
                earlier in the same operation

        Returns:
            True if the list was loaded
        """
        self.dispatch(LoadStarted(CalendarList.MILESTONES, clear_error=announce))
        result = await self.repository.get_upcoming_milestones(self.max_milestones)
        if isinstance(result, Failure):
            logger.error(f"Failed to load upcoming milestones: {result.message}")
            self.dispatch(
                LoadFailed(
                    CalendarList.MILESTONES,
                    result.message or "Failed to load upcoming milestones",
                )
            )
            return False

        self.dispatch(
            LoadSucceeded(
                CalendarList.MILESTONES,
                tuple(result.value),
                "Milestones loaded successfully" if announce else None,
            )
        )
        return True

    async def load_schedule(self, announce: bool = True) -> bool:
        """Replace today's events with a fresh copy from the server.

        Args:
            announce: Set a success message when loading succeeds. Re-fetches
                after a mutation pass False, which also keeps errors raised
                earlier in the same operation

        Returns:
            True if the list was loaded
        """
        self.dispatch(LoadStarted(CalendarList.SCHEDULE, clear_error=announce))
        result = await self.repository.get_todays_schedule()
        if isinstance(result, Failure):
            logger.error(f"Failed to load today's schedule: {result.message}")
            self.dispatch(
                LoadFailed(
                    CalendarList.SCHEDULE,
                    result.message or "Failed to load today's schedule",
                )
            )
            return False

        self.dispatch(
            LoadSucceeded(
                CalendarList.SCHEDULE,
                tuple(result.value),
                "Today's schedule loaded successfully" if announce else None,
            )
        )
        return True

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def create_milestone(self, request: CreateEventRequest) -> bool:
        """Create a milestone, then reload the milestone list."""
        self.dispatch(MutationStarted(CalendarList.MILESTONES))
        result = await self.repository.create_milestone(request)
        if isinstance(result, Failure):
            logger.error(f"Failed to create milestone: {result.message}")
            self.dispatch(
                MutationFailed(
                    result.message or "Failed to create milestone",
                    CalendarList.MILESTONES,
                )
            )
            return False

        if await self.load_milestones(announce=False):
            self.dispatch(MutationSucceeded("Milestone created successfully!"))
        return True

    async def create_task(self, request: CreateEventRequest) -> bool:
        """Create a task, then reload today's schedule."""
        self.dispatch(MutationStarted(CalendarList.SCHEDULE))
        result = await self.repository.create_task(request)
        if isinstance(result, Failure):
            logger.error(f"Failed to create task: {result.message}")
            self.dispatch(
                MutationFailed(
                    result.message or "Failed to create task",
                    CalendarList.SCHEDULE,
                )
            )
            return False

        if await self.load_schedule(announce=False):
            self.dispatch(MutationSucceeded("Task created successfully!"))
        return True

    async def delete_event(self, event_id: str) -> bool:
        """Delete an event, then reload both lists."""
        self.dispatch(MutationStarted())
        result = await self.repository.delete_event(event_id)
        if isinstance(result, Failure):
            logger.error(f"Failed to delete event {event_id}: {result.message}")
            self.dispatch(MutationFailed(result.message or "Failed to delete event"))
            return False

        reloaded = await asyncio.gather(
            self.load_milestones(announce=False),
            self.load_schedule(announce=False),
        )
        if all(reloaded):
            self.dispatch(MutationSucceeded("Event deleted successfully!"))
        return True

    # -------------------------------------------------------------------------
    # Messages and display
    # -------------------------------------------------------------------------

    def clear_error(self) -> None:
        self.dispatch(ErrorCleared())

    def clear_success_message(self) -> None:
        self.dispatch(SuccessMessageCleared())

    def format_event_time(self, event: CalendarEvent) -> str:
        """Display string for an event's start, relative to today."""
        return render_display_time(event, today=self._today())
