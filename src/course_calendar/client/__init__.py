"""Client for the course calendar API.

Consumer-side counterpart of the HTTP API:

- `CalendarRepository` calls the server and folds every outcome into a
  `Result` (`Success` or `Failure` with a `FailureKind`).
- `CalendarViewModel` owns the UI-facing `CalendarUiState`, applies state
  transitions through the pure `reduce` function, and re-fetches after
  every successful mutation.
"""

from course_calendar.client.repository import CalendarRepository
from course_calendar.client.result import Failure, Result, Success
from course_calendar.client.state import CalendarList, CalendarUiState, reduce
from course_calendar.client.view_model import CalendarViewModel

__all__ = [
    "CalendarRepository",
    "Result",
    "Success",
    "Failure",
    "CalendarList",
    "CalendarUiState",
    "reduce",
    "CalendarViewModel",
]
