"""
Tests for new route construction.
"""

from datetime import timedelta

import pytest

from hikeplanner.planning.schemas import Plan
from hikeplanner.routing.config import get_config
from hikeplanner.routing.construction import (
    RETURN_PREFIX,
    create_route,
    generate_route_id,
)
from hikeplanner.routing.suggestions import TRANSIT_TIPS
from hikeplanner.shared.contracts.route_request import PlanRequest, Preferences
from hikeplanner.shared.errors import DestinationNotFoundError
from hikeplanner.tests.fakes import (
    HOME,
    NOON,
    FakeMaps,
    failed_directions,
    fixed_clock,
    make_leg,
    make_place,
    make_route,
    ok_directions,
    transit_step,
)


def _plan(**kwargs) -> Plan:
    defaults = {
        "destination": "Blue Hills",
        "search_query": "Blue Hills Reservation",
        "estimated_hiking_duration": 90,
    }
    defaults.update(kwargs)
    return Plan(**defaults)


class TestWalkingRoute:
    """A walking-only user gets an outbound walk and a hike."""

    def test_two_segments(self, walking_request, clock):
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[ok_directions(make_leg(2000, 1500))],
        )
        response = create_route(_plan(suggestions=["Bring water"]), walking_request, maps, clock=clock)
        route = response.route

        assert [s.mode for s in route.segments] == ["walking", "hiking"]
        assert route.segments[0].instructions == "Walk to Blue Hills"
        assert route.segments[0].duration == 25
        assert route.segments[1].duration == 90
        assert route.segments[1].distance == 4.5
        assert route.metrics.total_min == 115
        assert route.metrics.eta_arrival == NOON + timedelta(minutes=115)
        assert response.suggestions == ["Bring water"]

    def test_route_shape(self, walking_request, clock):
        maps = FakeMaps(
            places=[make_place("Blue Hills", 42.21, -71.11)],
            directions=[ok_directions(make_leg(2000, 1500))],
        )
        route = create_route(_plan(), walking_request, maps, clock=clock).route

        assert route.name == "Blue Hills Adventure"
        assert route.origin == HOME
        assert (route.destination.lat, route.destination.lng) == (42.21, -71.11)
        assert [w.name for w in route.waypoints] == ["Blue Hills"]
        assert route.route_id.startswith("route-")

    def test_destination_search_parameters(self, walking_request, clock):
        maps = FakeMaps(places=[make_place("Blue Hills")])
        create_route(_plan(), walking_request, maps, clock=clock)

        search = maps.calls_for("text_search")[0]
        assert search["query"] == "Blue Hills Reservation"
        assert search["center"] == HOME
        assert search["radius"] == 50000
        assert maps.calls_for("directions")[0]["mode"] == "walking"

    def test_configured_radius(self, walking_request, clock):
        maps = FakeMaps(places=[make_place("Blue Hills")])
        create_route(
            _plan(), walking_request, maps, clock=clock,
            config=get_config(destination_radius_m=20_000),
        )
        assert maps.calls_for("text_search")[0]["radius"] == 20_000

    def test_first_place_is_used(self, walking_request, clock):
        maps = FakeMaps(places=[make_place("Blue Hills"), make_place("Fells")])
        route = create_route(_plan(), walking_request, maps, clock=clock).route
        assert route.name == "Blue Hills Adventure"

    def test_bicycling_preferred_over_walking(self, clock):
        request = PlanRequest(
            query="ride and hike",
            user_location=HOME,
            preferences=Preferences(transport_modes=["bicycling", "walking"]),
        )
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[ok_directions(make_leg(8000, 1800))],
        )
        route = create_route(_plan(), request, maps, clock=clock).route

        assert maps.calls_for("directions")[0]["mode"] == "bicycling"
        assert route.segments[0].mode == "bicycling"
        assert route.segments[0].instructions == "Bike to Blue Hills"

    def test_outbound_failure_is_omitted(self, walking_request, clock):
        """An unroutable outbound leg leaves just the hike."""
        maps = FakeMaps(places=[make_place("Blue Hills")], directions=[failed_directions()])
        route = create_route(_plan(), walking_request, maps, clock=clock).route

        assert [s.mode for s in route.segments] == ["hiking"]
        assert route.metrics.total_min == 90

    def test_no_destination_raises(self, walking_request, clock):
        maps = FakeMaps(places=[])
        with pytest.raises(DestinationNotFoundError, match="Blue Hills Reservation"):
            create_route(_plan(), walking_request, maps, clock=clock)
        assert maps.calls_for("directions") == []

    def test_oversized_suggestion_limit_is_clamped(self, walking_request, clock):
        """A limit above five still yields a valid response."""
        maps = FakeMaps(places=[make_place("Blue Hills")])
        plan = _plan(suggestions=[f"tip {i}" for i in range(7)])
        response = create_route(
            plan, walking_request, maps, clock=clock,
            config=get_config(max_suggestions=6),
        )
        assert response.suggestions == [f"tip {i}" for i in range(5)]


class TestTransitRoute:
    """A transit user gets transit out, a hike and transit back."""

    @pytest.fixture
    def transit_request(self, transit_prefs):
        return PlanRequest(query="hike by train", user_location=HOME, preferences=transit_prefs)

    def _maps(self, outbound=None, inbound=None):
        outbound = outbound or ok_directions(
            make_leg(15000, 2400, steps=[transit_step("Red", "Ashmont")])
        )
        inbound = inbound or ok_directions(
            make_leg(15000, 2700, steps=[transit_step("Red", "Alewife")])
        )
        return FakeMaps(places=[make_place("Blue Hills")], directions=[outbound, inbound])

    def test_three_segments(self, transit_request, clock):
        maps = self._maps()
        response = create_route(_plan(requires_transit=True), transit_request, maps, clock=clock)
        route = response.route

        assert [s.mode for s in route.segments] == ["transit", "hiking", "transit"]
        assert route.segments[0].instructions == "Take Red to Ashmont"
        assert route.segments[2].instructions == f"{RETURN_PREFIX}: Take Red to Alewife"
        assert route.segments[2].waypoints is None
        assert route.metrics.total_min == 40 + 90 + 45
        assert response.suggestions == TRANSIT_TIPS

    def test_return_leg_requested_backwards(self, transit_request, clock):
        maps = self._maps()
        create_route(_plan(requires_transit=True), transit_request, maps, clock=clock)

        outbound, inbound = maps.calls_for("directions")
        assert outbound["mode"] == inbound["mode"] == "transit"
        assert outbound["origin"] == HOME
        assert inbound["destination"] == HOME
        assert inbound["origin"] == outbound["destination"]

    def test_return_failure_is_omitted(self, transit_request, clock):
        maps = self._maps(inbound=failed_directions("NOT_FOUND"))
        route = create_route(_plan(requires_transit=True), transit_request, maps, clock=clock).route
        assert [s.mode for s in route.segments] == ["transit", "hiking"]
        assert route.metrics.total_min == 130

    def test_both_transit_legs_can_be_omitted(self, transit_request, clock):
        maps = FakeMaps(places=[make_place("Blue Hills")])
        route = create_route(_plan(requires_transit=True), transit_request, maps, clock=clock).route
        assert [s.mode for s in route.segments] == ["hiking"]

    def test_no_transit_needed(self, transit_request, clock):
        """Transit allowed but not required walks out and skips the return leg."""
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[ok_directions(make_leg(2000, 1500))],
        )
        route = create_route(_plan(requires_transit=False), transit_request, maps, clock=clock).route
        assert [s.mode for s in route.segments] == ["walking", "hiking"]
        assert len(maps.calls_for("directions")) == 1

    def test_transit_required_but_not_allowed(self, walking_request, clock):
        """Outbound falls back to walking; the return leg is still transit."""
        maps = FakeMaps(
            places=[make_place("Blue Hills")],
            directions=[
                ok_directions(make_leg(2000, 1500)),
                ok_directions(make_leg(15000, 2700, steps=[transit_step("Red", "Alewife")])),
            ],
        )
        route = create_route(_plan(requires_transit=True), walking_request, maps, clock=clock).route
        assert [s.mode for s in route.segments] == ["walking", "hiking", "transit"]


class TestRouteIds:
    """Tests for fresh route identifiers."""

    def test_format(self):
        route_id = generate_route_id(fixed_clock(NOON))
        prefix, millis, suffix = route_id.split("-")
        assert prefix == "route"
        assert int(millis) == int(NOON.timestamp() * 1000)
        assert len(suffix) == 9

    def test_unique(self):
        assert generate_route_id(fixed_clock(NOON)) != generate_route_id(fixed_clock(NOON))

    def test_new_route_ignores_current_route_id(self, clock):
        request = PlanRequest(query="hike", user_location=HOME, current_route=make_route("r1"))
        maps = FakeMaps(places=[make_place("Blue Hills")])
        route = create_route(_plan(), request, maps, clock=clock).route
        assert route.route_id != "r1"
