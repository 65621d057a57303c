"""Event classification and mapping.

Two pure helpers sit between the Google adapter and the service:

- `map_event` projects a raw Google Calendar event resource onto our
  `CalendarEvent` model. It is total: any dict maps, missing fields get
  defaults, and start/end times are passed through untouched.
- `EventClassifier` decides whether an event looks course-related. It is a
  plain substring match on a fixed keyword set, so "lab" also matches
  "collaborate".
"""

from __future__ import annotations

from typing import Any, Iterable

from course_calendar.models.event import NO_TITLE, CalendarEvent, EventTime

DEFAULT_COURSE_TAG = "CPEN 321"

DEADLINE_KEYWORDS: tuple[str, ...] = (
    "assignment",
    "project",
    "milestone",
    "deadline",
    "due",
    "exam",
    "quiz",
    "lab",
    "homework",
    "deliverable",
)


def course_code_variants(course_tag: str) -> list[str]:
    """Spellings of a course code to look for ("cpen 321", "cpen321")."""
    tag = " ".join(course_tag.lower().split())
    variants = [tag]
    compact = tag.replace(" ", "")
    if compact != tag:
        variants.append(compact)
    return variants


class EventClassifier:
    """Keyword matcher for course-related events.

    Example:
        ```python
        classifier = EventClassifier("CPEN 321")
        classifier.is_relevant("CPEN 321 Assignment 2 due", "")  # True
        classifier.is_relevant("Lunch with Sam", "")  # False
        ```
    """

    def __init__(
        self,
        course_tag: str = DEFAULT_COURSE_TAG,
        keywords: Iterable[str] = DEADLINE_KEYWORDS,
    ):
        self.course_tag = course_tag
        self.keywords: tuple[str, ...] = tuple(
            dict.fromkeys(
                k.lower() for k in [*course_code_variants(course_tag), *keywords]
            )
        )

    def is_relevant(self, summary: str | None, description: str | None) -> bool:
        """Check whether any keyword occurs in the summary or description."""
        text = f"{summary or ''} {description or ''}".lower()
        return any(keyword in text for keyword in self.keywords)

    def filter_events(self, items: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
        """Keep raw events that have a title and match a keyword.

        Input order is preserved.
        """
        return [
            item
            for item in items
            if item.get("summary")
            and self.is_relevant(item.get("summary"), item.get("description"))
        ]


_default_classifier = EventClassifier()


def is_relevant(summary: str | None, description: str | None) -> bool:
    """Classify with the default course tag and keyword set."""
    return _default_classifier.is_relevant(summary, description)


def _event_time(data: Any) -> EventTime:
    if not isinstance(data, dict):
        return EventTime()
    date = data.get("date")
    date_time = data.get("dateTime")
    return EventTime(
        date=date if isinstance(date, str) else None,
        date_time=date_time if isinstance(date_time, str) else None,
    )


def _text(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) and value else default


def map_event(data: dict[str, Any]) -> CalendarEvent:
    """Create a `CalendarEvent` from a Google Calendar API event resource.

    Never raises for dict input. Absent fields become defaults: ``id``,
    ``created`` and ``updated`` become ``""`` and ``summary`` becomes
    "No Title". Only the start/end fields the provider sent are kept.
    """
    return CalendarEvent(
        id=_text(data, "id"),
        summary=_text(data, "summary", NO_TITLE),
        description=_text(data, "description"),
        start=_event_time(data.get("start")),
        end=_event_time(data.get("end")),
        location=_text(data, "location"),
        html_link=_text(data, "htmlLink"),
        created=_text(data, "created"),
        updated=_text(data, "updated"),
    )
