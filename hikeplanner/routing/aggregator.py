"""
Segment and metrics aggregation.

Converts provider legs into route segments and rolls the finished
segment list into totals and an ETA. Metrics are only ever computed by
`finalize_route`, once, after every segment is in place.
"""

import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from hikeplanner.shared.contracts.route_output import (
    Point,
    Route,
    RouteMetrics,
    RouteSegment,
    Waypoint,
)


def round_half_up(value: float, digits: int = 0) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def leg_minutes(leg: Dict[str, Any]) -> int:
    return int(round_half_up(leg["duration"]["value"] / 60))


def leg_km(leg: Dict[str, Any]) -> float:
    return leg["distance"]["value"] / 1000


def step_locations(leg: Dict[str, Any]) -> List[Point]:
    """Start location of every step in the leg."""
    return [Point(**step["start_location"]) for step in leg.get("steps", [])]


def transit_instructions(leg: Dict[str, Any], prefix: Optional[str] = None) -> str:
    """
    Describe the transit rides of a leg.

    Each named transit step becomes "Take <line> to <stop>"; rides are
    joined with "then". Without any transit step the leg falls back to
    "Go to <end address>", or to the prefix alone when one is given.

    Args:
        leg: Provider directions leg
        prefix: Optional label such as "Return to starting point"

    Returns:
        Instruction text
    """
    rides = []
    for step in leg.get("steps", []):
        if step.get("travel_mode") != "TRANSIT":
            continue
        details = step.get("transit_details")
        if not details:
            continue
        line = details.get("line", {})
        line_name = line.get("short_name") or line.get("name")
        stop_name = details.get("arrival_stop", {}).get("name")
        rides.append(f"Take {line_name} to {stop_name}")

    if not rides:
        return prefix or f"Go to {leg.get('end_address', 'destination')}"

    instruction = ", then ".join(rides)
    return f"{prefix}: {instruction}" if prefix else instruction


def segment_from_leg(
    leg: Dict[str, Any],
    mode: str,
    instructions: Optional[str] = None,
    include_waypoints: bool = True,
) -> RouteSegment:
    """
    Normalize one provider leg into a segment.

    Distance is converted from meters to km and duration from seconds to
    whole minutes. Transit legs get synthesized ride instructions when no
    explicit instructions are given.
    """
    if instructions is None:
        if mode == "transit":
            instructions = transit_instructions(leg)
        else:
            instructions = f"Go to {leg.get('end_address', 'destination')}"

    return RouteSegment(
        mode=mode,
        instructions=instructions,
        distance=leg_km(leg),
        duration=leg_minutes(leg),
        waypoints=step_locations(leg) if include_waypoints else None,
    )


def segments_from_route(provider_route: Dict[str, Any], mode: str) -> List[RouteSegment]:
    """One segment per leg, in travel order."""
    return [segment_from_leg(leg, mode) for leg in provider_route.get("legs", [])]


def estimate_hiking_distance(duration_min: int, pace_kmh: float = 3.0) -> float:
    """Distance covered at a steady pace, rounded to 0.1 km."""
    hours = duration_min / 60
    return round_half_up(hours * pace_kmh, 1)


def hiking_segment(
    place_name: str, duration_min: int, pace_kmh: float = 3.0
) -> RouteSegment:
    return RouteSegment(
        mode="hiking",
        instructions=f"Hike at {place_name}",
        distance=estimate_hiking_distance(duration_min, pace_kmh),
        duration=duration_min,
    )


def compute_metrics(segments: List[RouteSegment], now: datetime) -> RouteMetrics:
    """Total minutes across all segments and the arrival time from `now`."""
    total_min = sum(segment.duration for segment in segments)
    return RouteMetrics(
        total_min=total_min,
        eta_arrival=now + timedelta(minutes=total_min),
    )


def finalize_route(
    route_id: str,
    name: str,
    origin: Point,
    destination: Point,
    waypoints: List[Waypoint],
    segments: List[RouteSegment],
    now: datetime,
) -> Route:
    """Assemble a route from its finished segments."""
    return Route(
        route_id=route_id,
        name=name,
        origin=origin,
        destination=destination,
        waypoints=list(waypoints),
        segments=list(segments),
        metrics=compute_metrics(segments, now),
    )
