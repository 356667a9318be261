"""Tests for the HTTP routes using FastAPI's TestClient."""
import pytest
from fastapi.testclient import TestClient

from groupmatch.api.app import create_app
from groupmatch.core.dependencies import get_store


def _payload(user, topic="Coffee", start="14:00", end="16:00", lat=40.7128):
    return {
        "topic": topic,
        "group_size": 2,
        "scheduled_times": [{"date": "2024-06-01", "start_time": start, "end_time": end}],
        "location": {"latitude": lat, "longitude": -74.0060, "address": "Manhattan"},
        "suggested_location": "Blue Bottle",
        "created_by": user,
    }


@pytest.fixture
def client():
    with TestClient(create_app()) as c:
        yield c


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok", "service": "groupmatch"}

    def test_store_health(self, client):
        body = client.get("/health/store").json()
        assert body["status"] == "ok"
        assert body["store"]["backend"] == "memory"


class TestEventRoutes:
    def test_submit_and_match(self, client):
        first = client.post("/events", json=_payload("alice"))
        assert first.status_code == 201
        assert first.json()["matched"] is False

        second = client.post("/events", json=_payload("bob", topic="coffee chat", start="15:00", end="17:00"))
        assert second.status_code == 201
        assert second.json()["matched"] is True

        planned = client.get("/planned-events", params={"user": "alice"}).json()["planned_events"]
        assert len(planned) == 1
        assert planned[0]["meeting_time"] == {"date": "2024-06-01", "start_time": "15:00", "duration": 60}
        assert planned[0]["event_location"] == "Blue Bottle"
        assert client.get("/events", params={"user": "alice"}).json()["events"] == []

    def test_invalid_time_slot_rejected(self, client):
        response = client.post("/events", json=_payload("alice", start="16:00", end="14:00"))
        assert response.status_code == 422

    def test_group_size_below_two_rejected(self, client):
        payload = _payload("alice")
        payload["group_size"] = 1
        assert client.post("/events", json=payload).status_code == 422

    def test_empty_schedule_rejected(self, client):
        payload = _payload("alice")
        payload["scheduled_times"] = []
        assert client.post("/events", json=payload).status_code == 422

    def test_delete_flow(self, client):
        event_id = client.post("/events", json=_payload("alice")).json()["event"]["id"]

        assert client.delete(f"/events/{event_id}", params={"user": "bob"}).status_code == 403
        assert client.delete(f"/events/{event_id}", params={"user": "alice"}).status_code == 204
        assert client.delete(f"/events/{event_id}", params={"user": "alice"}).status_code == 404

    def test_store_outage_returns_503(self, client):
        get_store().fail_writes = True
        response = client.post("/events", json=_payload("alice"))
        assert response.status_code == 503

    def test_sweep(self, client):
        assert client.post("/matching/sweep").json() == {"planned_events_created": 0}


class TestSuggestionRoutes:
    def test_search_and_join(self, client):
        suggested_id = client.post("/events", json=_payload("bob", lat=40.75)).json()["event"]["id"]

        search = client.post(
            "/suggestions/search",
            json={"user": "alice", "location": {"latitude": 40.7128, "longitude": -74.0060}},
        )
        suggestions = search.json()["suggestions"]
        assert [s["event"]["id"] for s in suggestions] == [suggested_id]
        assert suggestions[0]["distance"] == 2.6

        joined = client.post(
            f"/suggestions/{suggested_id}/join",
            json={
                "user": "alice",
                "scheduled_times": [{"date": "2024-06-01", "start_time": "15:00", "end_time": "16:00"}],
            },
        )
        assert joined.status_code == 201
        assert joined.json()["matched"] is True
        assert joined.json()["event"]["based_on_suggestion"] == suggested_id

    def test_join_missing_suggestion(self, client):
        response = client.post(
            "/suggestions/missing/join",
            json={
                "user": "alice",
                "scheduled_times": [{"date": "2024-06-01", "start_time": "15:00", "end_time": "16:00"}],
            },
        )
        assert response.status_code == 404
