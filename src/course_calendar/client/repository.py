"""Calendar repository.

Client-side wrapper over the calendar HTTP API. One method per server
operation, each returning a `Result`:

| Outcome                                 | Result                               |
|-----------------------------------------|--------------------------------------|
| 2xx with ``data``                       | ``Success(payload)``                 |
| 401                                     | ``Failure(MISSING_CREDENTIAL, ...)`` |
| other non-2xx, or 2xx without ``data``  | ``Failure(UPSTREAM_FAILURE, ...)``   |
| timeout, DNS, connect or I/O error      | ``Failure(TRANSPORT_FAULT, ...)``    |

Failure messages come from the server's ``{"message": ...}`` body when
present, otherwise from an operation-specific default. Each call is
attempted exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar
from urllib.parse import quote

import httpx

from course_calendar.client.result import Failure, Result, Success
from course_calendar.config import get_settings
from course_calendar.errors import FailureKind
from course_calendar.models.event import CalendarEvent, CreateEventRequest

logger = logging.getLogger(__name__)

T = TypeVar("T")

TokenProvider = Callable[[], Optional[str]]


def _parse_events(key: str) -> Callable[[Any], list[CalendarEvent]]:
    def parse(data: Any) -> list[CalendarEvent]:
        return [CalendarEvent.model_validate(item) for item in data[key]]

    return parse


def _parse_event(data: Any) -> CalendarEvent:
    return CalendarEvent.model_validate(data["event"])


def _parse_auth_url(data: Any) -> str:
    auth_url = data["authUrl"]
    if not isinstance(auth_url, str):
        raise TypeError("authUrl is not a string")
    return auth_url


class CalendarRepository:
    """Calendar API client producing `Result` values.

    Example:
        ```python
        async with CalendarRepository(token_provider=lambda: token) as repo:
            result = await repo.get_todays_schedule()
            if result.is_success:
                for event in result.value:
                    print(event.summary)
            else:
                print(result.kind, result.message)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        token_provider: TokenProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        """Initialize the repository.

        Args:
            base_url: Server URL (or from settings)
            token_provider: Returns the current Google access token, if any
            http_client: Client to use; the repository closes only clients it creates
            timeout: Request timeout in seconds (or from settings)
        """
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token_provider = token_provider or (lambda: None)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout or settings.request_timeout_seconds
        )

    async def __aenter__(self) -> CalendarRepository:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def get_upcoming_milestones(
        self, max_results: int | None = None
    ) -> Result[list[CalendarEvent]]:
        params = {"maxResults": max_results} if max_results is not None else None
        return await self._request(
            "GET",
            "/calendar/milestones",
            "Failed to get upcoming milestones.",
            _parse_events("milestones"),
            params=params,
        )

    async def get_todays_schedule(self) -> Result[list[CalendarEvent]]:
        return await self._request(
            "GET",
            "/calendar/schedule",
            "Failed to get today's schedule.",
            _parse_events("events"),
        )

    async def get_auth_url(self) -> Result[str]:
        return await self._request(
            "GET",
            "/calendar/auth-url",
            "Failed to get calendar auth URL.",
            _parse_auth_url,
        )

    async def create_milestone(self, request: CreateEventRequest) -> Result[CalendarEvent]:
        return await self._request(
            "POST",
            "/calendar/milestones",
            "Failed to create milestone.",
            _parse_event,
            json=request.model_dump(by_alias=True, exclude_none=True),
        )

    async def create_task(self, request: CreateEventRequest) -> Result[CalendarEvent]:
        return await self._request(
            "POST",
            "/calendar/tasks",
            "Failed to create task.",
            _parse_event,
            json=request.model_dump(by_alias=True, exclude_none=True),
        )

    async def delete_event(self, event_id: str) -> Result[None]:
        return await self._request(
            "DELETE",
            f"/calendar/events/{quote(event_id, safe='')}",
            "Failed to delete event.",
            None,
        )

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        default_message: str,
        parse: Callable[[Any], T] | None,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Result[T]:
        """Issue one request and fold every outcome into a `Result`.

        ``parse`` extracts the payload from the body's ``data`` member; when
        it is None, any 2xx counts as success with a None payload.
        """
        try:
            response = await self._client.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                params=params,
                json=json,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Network timeout: {method} {path}", exc_info=e)
            return self._transport_fault(e, default_message)
        except httpx.HTTPError as e:
            logger.error(f"Network error: {method} {path}: {e}", exc_info=e)
            return self._transport_fault(e, default_message)

        body = self._json_body(response)

        if not response.is_success:
            message = self._body_message(body, default_message)
            kind = (
                FailureKind.MISSING_CREDENTIAL
                if response.status_code == 401
                else FailureKind.UPSTREAM_FAILURE
            )
            logger.error(f"{default_message} HTTP {response.status_code}: {message}")
            return Failure(kind, message, status_code=response.status_code)

        if parse is None:
            return Success(None)

        data = body.get("data") if isinstance(body, dict) else None
        if data is None:
            message = self._body_message(body, default_message)
            logger.error(f"{default_message} Response had no data: {message}")
            return Failure(
                FailureKind.UPSTREAM_FAILURE,
                message,
                status_code=response.status_code,
            )

        try:
            return Success(parse(data))
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"{default_message} Malformed data: {e}")
            return Failure(
                FailureKind.UPSTREAM_FAILURE,
                default_message,
                status_code=response.status_code,
                cause=e,
            )

    @staticmethod
    def _body_message(body: Any, default_message: str) -> str:
        if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
        return default_message

    @staticmethod
    def _json_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _transport_fault(error: httpx.HTTPError, default_message: str) -> Failure:
        return Failure(
            FailureKind.TRANSPORT_FAULT,
            str(error) or default_message,
            cause=error,
        )
