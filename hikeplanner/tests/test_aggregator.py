"""
Unit tests for segment and metrics aggregation.
"""

from datetime import timedelta

from hikeplanner.routing.aggregator import (
    compute_metrics,
    estimate_hiking_distance,
    finalize_route,
    hiking_segment,
    segment_from_leg,
    segments_from_route,
    transit_instructions,
)
from hikeplanner.shared.contracts.route_output import RouteSegment
from hikeplanner.tests.fakes import (
    HOME,
    NOON,
    TRAILHEAD,
    make_leg,
    transit_step,
    walk_step,
)


class TestTransitInstructions:
    """Tests for transit instruction synthesis."""

    def test_single_ride(self):
        leg = make_leg(1000, 600, steps=[walk_step(), transit_step("Red", "Ashmont")])
        assert transit_instructions(leg) == "Take Red to Ashmont"

    def test_rides_joined_with_then(self):
        leg = make_leg(
            1000,
            600,
            steps=[transit_step("Red", "Ashmont"), transit_step("240", "Blue Hill Ave")],
        )
        assert transit_instructions(leg) == "Take Red to Ashmont, then Take 240 to Blue Hill Ave"

    def test_falls_back_to_end_address(self):
        leg = make_leg(1000, 600, steps=[walk_step()], end_address="Hillside St")
        assert transit_instructions(leg) == "Go to Hillside St"

    def test_prefix_is_prepended(self):
        leg = make_leg(1000, 600, steps=[transit_step("Red", "Alewife")])
        assert transit_instructions(leg, "Return to starting point") == (
            "Return to starting point: Take Red to Alewife"
        )

    def test_prefix_alone_when_no_rides(self):
        leg = make_leg(1000, 600, steps=[])
        assert transit_instructions(leg, "Return home") == "Return home"

    def test_line_name_used_without_short_name(self):
        step = transit_step("X", "Mattapan")
        step["transit_details"]["line"] = {"name": "Mattapan Trolley"}
        leg = make_leg(1000, 600, steps=[step])
        assert transit_instructions(leg) == "Take Mattapan Trolley to Mattapan"


class TestSegmentFromLeg:
    """Tests for leg normalization."""

    def test_units_converted(self):
        """Meters become km and seconds become whole minutes."""
        segment = segment_from_leg(make_leg(2450, 1830), "walking")
        assert segment.distance == 2.45
        assert segment.duration == 31

    def test_minutes_rounded(self):
        assert segment_from_leg(make_leg(100, 89), "walking").duration == 1
        assert segment_from_leg(make_leg(100, 29), "walking").duration == 0

    def test_transit_gets_ride_instructions(self):
        leg = make_leg(5000, 1200, steps=[transit_step("Orange", "Forest Hills")])
        segment = segment_from_leg(leg, "transit")
        assert segment.instructions == "Take Orange to Forest Hills"

    def test_step_locations_become_waypoints(self):
        leg = make_leg(5000, 1200, steps=[walk_step(1.0, 2.0), walk_step(3.0, 4.0)])
        segment = segment_from_leg(leg, "walking")
        assert [(p.lat, p.lng) for p in segment.waypoints] == [(1.0, 2.0), (3.0, 4.0)]

    def test_waypoints_can_be_skipped(self):
        segment = segment_from_leg(make_leg(100, 60), "transit", include_waypoints=False)
        assert segment.waypoints is None

    def test_one_segment_per_leg(self):
        route = {"legs": [make_leg(1000, 600), make_leg(2000, 1200)]}
        segments = segments_from_route(route, "walking")
        assert [s.duration for s in segments] == [10, 20]
        assert all(s.mode == "walking" for s in segments)


class TestHiking:
    """Tests for the hiking segment estimate."""

    def test_distance_at_three_kmh(self):
        assert estimate_hiking_distance(90) == 4.5
        assert estimate_hiking_distance(120) == 6.0

    def test_distance_rounded_to_one_decimal(self):
        assert estimate_hiking_distance(50) == 2.5

    def test_hiking_segment(self):
        segment = hiking_segment("Blue Hills", 90)
        assert segment.mode == "hiking"
        assert segment.duration == 90
        assert segment.distance == 4.5
        assert segment.instructions == "Hike at Blue Hills"


class TestMetrics:
    """Tests for totals and ETA."""

    def test_total_is_sum_of_durations(self):
        segments = [
            RouteSegment(mode="walking", instructions="a", distance=1, duration=12),
            RouteSegment(mode="hiking", instructions="b", distance=3, duration=60),
        ]
        metrics = compute_metrics(segments, NOON)
        assert metrics.total_min == 72
        assert metrics.eta_arrival == NOON + timedelta(minutes=72)

    def test_empty_route(self):
        metrics = compute_metrics([], NOON)
        assert metrics.total_min == 0
        assert metrics.eta_arrival == NOON

    def test_finalize_route(self):
        segments = [hiking_segment("Blue Hills", 30)]
        route = finalize_route("r9", "Test", HOME, TRAILHEAD, [], segments, NOON)
        assert route.route_id == "r9"
        assert route.metrics.total_min == 30
        assert route.metrics.eta_arrival == NOON + timedelta(minutes=30)

    def test_metrics_serialize_with_wire_names(self):
        route = finalize_route("r9", "Test", HOME, TRAILHEAD, [], [], NOON)
        dumped = route.model_dump(mode="json", by_alias=True)
        assert set(dumped["metrics"]) == {"totalMin", "etaArrival"}
        assert dumped["metrics"]["etaArrival"].startswith("2026-06-01T12:00:00")
