"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from course_calendar.api import create_app
from course_calendar.api.routes.calendar import get_calendar_service
from course_calendar.calendar.google_calendar import CalendarProviderError

from conftest import make_google_event

AUTH = {"Authorization": "Bearer ya29.test-token"}


@pytest.fixture
def client(service):
    """Test client whose routes use the fixed-clock service."""
    app = create_app()
    app.dependency_overrides[get_calendar_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


class TestAuthentication:
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("get", "/calendar/milestones"),
            ("get", "/calendar/schedule"),
            ("delete", "/calendar/events/e1"),
        ],
    )
    def test_missing_token(self, client, client_factory, method, path):
        response = client.request(method, path)

        assert response.status_code == 401
        assert response.json() == {"message": "Access token required for calendar access"}
        client_factory.assert_not_called()

    def test_missing_token_on_create(self, client):
        response = client.post(
            "/calendar/tasks", json={"title": "Lab 3", "dueDate": "2024-12-25"}
        )
        assert response.status_code == 401

    def test_blank_token(self, client):
        response = client.get("/calendar/schedule", headers={"Authorization": "Bearer  "})
        assert response.status_code == 401

    def test_token_reaches_provider(self, client, client_factory):
        client.get("/calendar/schedule", headers=AUTH)
        client_factory.assert_called_once_with("ya29.test-token", "primary")


class TestMilestones:
    def test_list(self, client, google_client, upcoming_events):
        google_client.list_events.return_value = upcoming_events

        response = client.get("/calendar/milestones", headers=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Upcoming milestones retrieved successfully"
        milestones = body["data"]["milestones"]
        assert [m["id"] for m in milestones] == ["e1", "e3", "e5", "e7"]
        assert milestones[0]["htmlLink"] == "https://calendar.google.com/event?eid=e1"
        assert milestones[0]["start"] == {"dateTime": "2024-12-21T10:00:00-08:00"}
        assert milestones[2]["start"] == {"date": "2024-12-23"}

    def test_max_results(self, client, google_client, upcoming_events):
        google_client.list_events.return_value = upcoming_events

        response = client.get("/calendar/milestones?maxResults=1", headers=AUTH)

        assert [m["id"] for m in response.json()["data"]["milestones"]] == ["e1"]

    @pytest.mark.parametrize("value", ["0", "51", "many"])
    def test_invalid_max_results(self, client, value):
        response = client.get(f"/calendar/milestones?maxResults={value}", headers=AUTH)
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid input data"

    def test_empty(self, client):
        response = client.get("/calendar/milestones", headers=AUTH)
        assert response.json()["data"] == {"milestones": []}

    def test_provider_failure(self, client, google_client):
        google_client.list_events.side_effect = CalendarProviderError("HTTP 401", 401)

        response = client.get("/calendar/milestones", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch upcoming milestones"}


class TestSchedule:
    def test_list(self, client, google_client, upcoming_events):
        google_client.list_events.return_value = upcoming_events

        response = client.get("/calendar/schedule", headers=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Today's schedule retrieved successfully"
        assert len(body["data"]["events"]) == 7
        assert body["data"]["events"][3]["summary"] == "No Title"

    def test_provider_failure(self, client, google_client):
        google_client.list_events.side_effect = CalendarProviderError("boom")

        response = client.get("/calendar/schedule", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch today's schedule"}


class TestCreate:
    def test_create_task(self, client, google_client):
        google_client.insert_event.return_value = make_google_event(
            "t1",
            "Task: Lab 3",
            start={"dateTime": "2024-12-25T14:00:00-08:00"},
            end={"dateTime": "2024-12-25T14:00:00-08:00"},
        )

        response = client.post(
            "/calendar/tasks",
            headers=AUTH,
            json={"title": "Lab 3", "dueDate": "2024-12-25", "dueTime": "14:00", "isAllDay": False},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Task created successfully"
        assert body["data"]["event"]["id"] == "t1"
        assert body["data"]["event"]["summary"] == "Task: Lab 3"
        sent = google_client.insert_event.call_args.args[0]
        assert sent["start"] == {"dateTime": "2024-12-25T14:00:00"}

    def test_create_milestone(self, client, google_client):
        google_client.insert_event.return_value = make_google_event(
            "m1", "CPEN 321 X", start={"date": "2024-12-25"}, end={"date": "2024-12-25"}
        )

        response = client.post(
            "/calendar/milestones",
            headers=AUTH,
            json={"title": "X", "dueDate": "2024-12-25", "isAllDay": True},
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Milestone created successfully"
        assert response.json()["data"]["event"]["start"] == {"date": "2024-12-25"}

    @pytest.mark.parametrize(
        "payload",
        [
            {"dueDate": "2024-12-25"},
            {"title": "", "dueDate": "2024-12-25"},
            {"title": "X" * 101, "dueDate": "2024-12-25"},
            {"title": "X", "dueDate": "12/25/2024"},
            {"title": "X", "dueDate": "2024-12-25", "dueTime": "25:00"},
            {"title": "X", "dueDate": "2024-12-25", "description": "d" * 501},
        ],
    )
    def test_invalid_input(self, client, client_factory, payload):
        response = client.post("/calendar/tasks", headers=AUTH, json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid input data"
        assert body["errors"]
        assert {"field", "message"} <= set(body["errors"][0])
        client_factory.assert_not_called()

    def test_invalid_input_names_the_field(self, client):
        response = client.post(
            "/calendar/milestones", headers=AUTH, json={"title": "X", "dueDate": "nope"}
        )
        assert response.json()["errors"][0]["field"] == "dueDate"

    def test_provider_failure(self, client, google_client):
        google_client.insert_event.side_effect = CalendarProviderError("boom", 403)

        response = client.post(
            "/calendar/milestones", headers=AUTH, json={"title": "X", "dueDate": "2024-12-25"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to create milestone"}


class TestDelete:
    def test_delete(self, client, google_client):
        response = client.delete("/calendar/events/e1", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"message": "Event deleted successfully"}
        google_client.delete_event.assert_called_once_with("e1")

    def test_provider_failure(self, client, google_client):
        google_client.delete_event.side_effect = CalendarProviderError("boom", 500)

        response = client.delete("/calendar/events/e1", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to delete event"}


class TestAuthUrl:
    def test_no_token_needed(self, client, client_factory):
        response = client.get("/calendar/auth-url")

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Authorization URL generated successfully"
        assert body["data"]["authUrl"].startswith("https://accounts.google.com/o/oauth2/v2/auth?")
        assert "client_id=test-client-id" in body["data"]["authUrl"]
        client_factory.assert_not_called()


def test_unknown_route_uses_message_body(client):
    response = client.get("/calendar/nothing-here", headers=AUTH)
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
