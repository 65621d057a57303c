"""UI state for the calendar screen.

`CalendarUiState` is immutable. Every change goes through `reduce`, a pure
``(state, action) -> state`` function; `CalendarViewModel` is the only
caller and applies actions one at a time.

## Transitions

- LoadStarted: list loading on, error cleared unless the load is a re-fetch
  after a mutation
- LoadSucceeded: list replaced, loading off, success message unless an error
  is showing
- LoadFailed: loading off, error set, list left unchanged
- MutationStarted: loading on for the affected list (if any), error cleared
- MutationSucceeded: success message set
- MutationFailed: loading off for the affected list (if any), error set
- ErrorCleared / SuccessMessageCleared: the slot is cleared

The success and error slots are mutually exclusive: setting one clears the
other.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from course_calendar.models.event import CalendarEvent


class CalendarList(str, Enum):
    """The two event lists shown on the calendar screen."""

    MILESTONES = "milestones"
    SCHEDULE = "schedule"


@dataclass(frozen=True)
class CalendarUiState:
    """Snapshot of everything the calendar screen renders."""

    is_loading_milestones: bool = False
    is_loading_schedule: bool = False
    milestones: tuple[CalendarEvent, ...] = ()
    todays_events: tuple[CalendarEvent, ...] = ()
    error_message: str | None = None
    success_message: str | None = None


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class LoadStarted:
    target: CalendarList
    clear_error: bool = True


@dataclass(frozen=True)
class LoadSucceeded:
    target: CalendarList
    events: tuple[CalendarEvent, ...]
    message: str | None = None


@dataclass(frozen=True)
class LoadFailed:
    target: CalendarList
    message: str


@dataclass(frozen=True)
class MutationStarted:
    target: CalendarList | None = None


@dataclass(frozen=True)
class MutationSucceeded:
    message: str


@dataclass(frozen=True)
class MutationFailed:
    message: str
    target: CalendarList | None = None


@dataclass(frozen=True)
class ErrorCleared:
    pass


@dataclass(frozen=True)
class SuccessMessageCleared:
    pass


Action = Union[
    LoadStarted,
    LoadSucceeded,
    LoadFailed,
    MutationStarted,
    MutationSucceeded,
    MutationFailed,
    ErrorCleared,
    SuccessMessageCleared,
]


def _with_loading(state: CalendarUiState, target: CalendarList | None, value: bool) -> CalendarUiState:
    if target is CalendarList.MILESTONES:
        return replace(state, is_loading_milestones=value)
    if target is CalendarList.SCHEDULE:
        return replace(state, is_loading_schedule=value)
    return state


def _with_error(state: CalendarUiState, message: str) -> CalendarUiState:
    return replace(state, error_message=message, success_message=None)


def _with_success(state: CalendarUiState, message: str) -> CalendarUiState:
    return replace(state, success_message=message, error_message=None)


def reduce(state: CalendarUiState, action: Action) -> CalendarUiState:
    """Apply one action to a state, returning the new state."""
    if isinstance(action, LoadStarted):
        state = _with_loading(state, action.target, True)
        return replace(state, error_message=None) if action.clear_error else state

    if isinstance(action, MutationStarted):
        return replace(_with_loading(state, action.target, True), error_message=None)

    if isinstance(action, LoadSucceeded):
        state = _with_loading(state, action.target, False)
        if action.target is CalendarList.MILESTONES:
            state = replace(state, milestones=tuple(action.events))
        else:
            state = replace(state, todays_events=tuple(action.events))
        if action.message is not None and state.error_message is None:
            state = _with_success(state, action.message)
        return state

    if isinstance(action, (LoadFailed, MutationFailed)):
        return _with_error(_with_loading(state, action.target, False), action.message)

    if isinstance(action, MutationSucceeded):
        return _with_success(state, action.message)

    if isinstance(action, ErrorCleared):
        return replace(state, error_message=None)

    if isinstance(action, SuccessMessageCleared):
        return replace(state, success_message=None)

    raise TypeError(f"Unknown action: {action!r}")
