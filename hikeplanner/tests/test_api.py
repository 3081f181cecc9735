"""
Tests for the HTTP API.

The planner collaborators and the history store are swapped through
FastAPI dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from hikeplanner.graph.dependencies import PlannerDependencies
from hikeplanner.graph.history import RequestHistory
from hikeplanner.graph.route_planner_api import get_dependencies, get_history
from hikeplanner.main import app
from hikeplanner.tests.fakes import (
    NOON,
    FakeMaps,
    FakeOpenAI,
    fixed_clock,
    make_leg,
    make_place,
    make_route,
    ok_directions,
)


CREATE_PLAN = {
    "action": "create_new",
    "destination": "Blue Hills",
    "searchQuery": "Blue Hills Reservation",
    "estimatedHikingDuration": 90,
    "suggestions": ["Bring water"],
}

BODY = {
    "userId": "hiker-1",
    "query": "easy hike near Boston",
    "userLocation": {"lat": 42.3, "lng": -71.1},
}


@pytest.fixture
def history():
    return RequestHistory(clock=fixed_clock(NOON))


@pytest.fixture
def make_client(history):
    def _make(oracle, maps):
        deps = PlannerDependencies(
            llm_client=FakeOpenAI(oracle), maps=maps, clock=fixed_clock(NOON)
        )
        app.dependency_overrides[get_dependencies] = lambda: deps
        app.dependency_overrides[get_history] = lambda: history
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


class TestServiceEndpoints:
    """Tests for the root and health endpoints."""

    def test_health(self):
        assert TestClient(app).get("/health").json() == {"status": "healthy"}

    def test_root_lists_endpoints(self):
        body = TestClient(app).get("/").json()
        assert body["endpoints"]["plan"] == "POST /api/routes/plan"


class TestPlanEndpoint:
    """Tests for POST /api/routes/plan."""

    def test_plans_route(self, make_client):
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[ok_directions(make_leg(2000, 1500))],
        )
        response = make_client(CREATE_PLAN, maps).post("/api/routes/plan", json=BODY)

        assert response.status_code == 200
        data = response.json()
        assert data["route"]["name"] == "Blue Hills Adventure"
        assert data["route"]["metrics"]["totalMin"] == 115
        assert "etaArrival" in data["route"]["metrics"]
        assert data["suggestions"] == ["Bring water"]

    def test_returned_route_can_be_modified(self, make_client):
        """A route from one call is accepted back as currentRoute."""
        route = make_route("r1").model_dump(mode="json", by_alias=True)
        maps = FakeMaps(directions=[ok_directions(make_leg(5000, 3000))])
        oracle = {"action": "modify_existing", "modifyType": "adjust_time"}
        body = dict(BODY, query="leave later", currentRoute=route)

        response = make_client(oracle, maps).post("/api/routes/plan", json=body)

        assert response.status_code == 200
        assert response.json()["route"]["route_id"] == "r1"

    def test_empty_query_rejected(self, make_client):
        client = make_client(CREATE_PLAN, FakeMaps())
        response = client.post("/api/routes/plan", json=dict(BODY, query=""))
        assert response.status_code == 422

    def test_blank_query_rejected(self, make_client, history):
        """Whitespace-only queries never reach the oracle."""
        client = make_client(CREATE_PLAN, FakeMaps())
        response = client.post("/api/routes/plan", json=dict(BODY, query="   \t "))

        assert response.status_code == 422
        assert history.history("hiker-1") == []

    def test_destination_not_found_is_422(self, make_client, history):
        response = make_client(CREATE_PLAN, FakeMaps()).post("/api/routes/plan", json=BODY)

        assert response.status_code == 422
        assert "No hiking locations found" in response.json()["detail"]
        assert history.usage_stats("hiker-1").failed_requests == 1

    def test_oracle_garbage_is_502(self, make_client):
        response = make_client("no plan today", FakeMaps()).post("/api/routes/plan", json=BODY)
        assert response.status_code == 502

    def test_unexpected_error_is_500(self, make_client):
        class BrokenMaps(FakeMaps):
            def text_search(self, query, center=None, radius=None):
                raise RuntimeError("socket closed")

        response = make_client(CREATE_PLAN, BrokenMaps()).post("/api/routes/plan", json=BODY)
        assert response.status_code == 500
        assert "socket closed" in response.json()["detail"]


class TestHistoryEndpoints:
    """Tests for the history and stats endpoints."""

    def test_history_and_stats(self, make_client):
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[ok_directions(make_leg(2000, 1500))],
        )
        client = make_client(CREATE_PLAN, maps)
        client.post("/api/routes/plan", json=BODY)
        client.post("/api/routes/plan", json=BODY)

        history = client.get("/api/routes/history/hiker-1").json()
        assert history["user_id"] == "hiker-1"
        assert len(history["requests"]) == 2
        assert history["requests"][0]["route_name"] == "Blue Hills Adventure"

        stats = client.get("/api/routes/stats/hiker-1").json()
        assert stats["total_requests"] == 2
        assert stats["success_rate"] == 1.0

        overall = client.get("/api/routes/stats").json()
        assert overall["total_users"] == 1

    def test_history_limit(self, make_client, history):
        for i in range(3):
            history.record(str(i), "hiker-2", f"q{i}", True, 1.0)
        client = make_client(CREATE_PLAN, FakeMaps())
        data = client.get("/api/routes/history/hiker-2", params={"limit": 1}).json()
        assert len(data["requests"]) == 1
