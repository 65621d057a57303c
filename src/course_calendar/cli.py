"""Command-line interface for the course calendar."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from pydantic import ValidationError

from course_calendar import __version__
from course_calendar.client.repository import CalendarRepository
from course_calendar.client.result import Failure
from course_calendar.client.view_model import CalendarViewModel
from course_calendar.config import get_settings
from course_calendar.models.event import CalendarEvent, CreateEventRequest

TOKEN_ENV_VAR = "COURSE_CALENDAR_TOKEN"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="course-calendar",
        description="Course Calendar - Course deadlines and today's agenda from Google Calendar",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--base-url",
        help="Server URL (default: API_BASE_URL setting)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get(TOKEN_ENV_VAR),
        help=f"Google access token (default: ${TOKEN_ENV_VAR})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: HOST setting)")
    serve_parser.add_argument("--port", type=int, help="Port (default: PORT setting)")

    subparsers.add_parser("auth-url", help="Print the Google consent URL")

    # Listing commands
    milestones_parser = subparsers.add_parser(
        "milestones", help="List upcoming course milestones"
    )
    milestones_parser.add_argument(
        "--max",
        type=int,
        dest="max_results",
        help="Maximum milestones to list",
    )
    subparsers.add_parser("schedule", help="List today's events")

    # Create commands
    for name, help_text in (
        ("add-milestone", "Create a course milestone"),
        ("add-task", "Create a task"),
    ):
        create_parser = subparsers.add_parser(name, help=help_text)
        create_parser.add_argument("title", help="Event title")
        create_parser.add_argument("--date", required=True, help="Due date (YYYY-MM-DD)")
        create_parser.add_argument("--time", help="Due time (HH:MM, 24-hour)")
        create_parser.add_argument("--all-day", action="store_true", help="All-day event")
        create_parser.add_argument("--description", help="Event description")

    delete_parser = subparsers.add_parser("delete", help="Delete an event")
    delete_parser.add_argument("event_id", help="Event ID")

    return parser


def _print_events(title: str, events: tuple[CalendarEvent, ...], view_model: CalendarViewModel) -> None:
    print(title)
    if not events:
        print("  (none)")
    for event in events:
        print(f"  {view_model.format_event_time(event):<24} {event.summary}  [{event.id}]")


async def _run_client(args: argparse.Namespace) -> int:
    async with CalendarRepository(
        base_url=args.base_url,
        token_provider=lambda: args.token,
    ) as repository:
        if args.command == "auth-url":
            result = await repository.get_auth_url()
            if isinstance(result, Failure):
                print(f"Error: {result.message}", file=sys.stderr)
                return 1
            print(result.value)
            return 0

        view_model = CalendarViewModel(
            repository,
            max_milestones=getattr(args, "max_results", None),
        )

        if args.command == "milestones":
            await view_model.load_milestones()
        elif args.command == "schedule":
            await view_model.load_schedule()
        elif args.command in ("add-milestone", "add-task"):
            try:
                request = CreateEventRequest(
                    title=args.title,
                    description=args.description,
                    due_date=args.date,
                    due_time=args.time,
                    is_all_day=args.all_day,
                )
            except ValidationError as e:
                print(f"Invalid input: {e}", file=sys.stderr)
                return 2
            if args.command == "add-milestone":
                await view_model.create_milestone(request)
            else:
                await view_model.create_task(request)
        elif args.command == "delete":
            await view_model.delete_event(args.event_id)

        state = view_model.state
        if state.error_message:
            print(f"Error: {state.error_message}", file=sys.stderr)
            return 1

        if args.command in ("milestones", "add-milestone", "delete"):
            _print_events("Upcoming milestones:", state.milestones, view_model)
        if args.command in ("schedule", "add-task", "delete"):
            _print_events("Today's schedule:", state.todays_events, view_model)
        if state.success_message:
            print(state.success_message)
        return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        import uvicorn

        uvicorn.run(
            "course_calendar.api:create_app",
            factory=True,
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=settings.log_level.lower(),
        )
        return 0

    return asyncio.run(_run_client(args))


if __name__ == "__main__":
    sys.exit(main())
