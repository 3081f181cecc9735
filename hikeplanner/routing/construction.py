"""
Route construction.

Builds a brand-new route from a plan: resolve the destination, add the
outbound leg, the hiking segment and an optional transit return leg.
Optional legs that the provider cannot route are dropped and the route is
returned without them.
"""

import logging
import uuid
from typing import List, Optional

from hikeplanner.planning.schemas import Plan
from hikeplanner.routing.aggregator import (
    finalize_route,
    hiking_segment,
    segment_from_leg,
    transit_instructions,
)
from hikeplanner.routing.config import RoutingConfig, DEFAULT_CONFIG
from hikeplanner.routing.suggestions import enhance_suggestions
from hikeplanner.shared.clock import Clock, system_clock
from hikeplanner.shared.contracts.route_output import (
    RouteResponse,
    RouteSegment,
    Waypoint,
)
from hikeplanner.shared.contracts.route_request import PlanRequest
from hikeplanner.shared.errors import DestinationNotFoundError
from hikeplanner.shared.maps.client import GoogleMapsClient, PlaceResult


logger = logging.getLogger(__name__)

RETURN_PREFIX = "Return to starting point"


def generate_route_id(clock: Clock = system_clock) -> str:
    """Fresh identifier for a newly constructed route."""
    millis = int(clock().timestamp() * 1000)
    return f"route-{millis}-{uuid.uuid4().hex[:9]}"


def _outbound_segment(
    plan: Plan,
    request: PlanRequest,
    destination: PlaceResult,
    maps: GoogleMapsClient,
    _log: str,
) -> Optional[RouteSegment]:
    if plan.requires_transit and request.allows("transit"):
        result = maps.directions(
            request.user_location,
            destination.location,
            mode="transit",
            alternatives=False,
        )
        if not result.ok:
            logger.warning(f"{_log}Outbound transit leg omitted | status={result.status}")
            return None
        return segment_from_leg(result.first_leg(), "transit")

    mode = "bicycling" if request.allows("bicycling") else "walking"
    result = maps.directions(request.user_location, destination.location, mode=mode)
    if not result.ok:
        logger.warning(f"{_log}Outbound {mode} leg omitted | status={result.status}")
        return None

    verb = "Walk" if mode == "walking" else "Bike"
    return segment_from_leg(
        result.first_leg(), mode, instructions=f"{verb} to {destination.name}"
    )


def _return_segment(
    request: PlanRequest,
    destination: PlaceResult,
    maps: GoogleMapsClient,
    _log: str,
) -> Optional[RouteSegment]:
    result = maps.directions(
        destination.location,
        request.user_location,
        mode="transit",
        alternatives=False,
    )
    if not result.ok:
        logger.warning(f"{_log}Return transit leg omitted | status={result.status}")
        return None

    leg = result.first_leg()
    return segment_from_leg(
        leg,
        "transit",
        instructions=transit_instructions(leg, RETURN_PREFIX),
        include_waypoints=False,
    )


def create_route(
    plan: Plan,
    request: PlanRequest,
    maps: GoogleMapsClient,
    clock: Clock = system_clock,
    config: Optional[RoutingConfig] = None,
    request_id: str = "unknown",
) -> RouteResponse:
    """
    Build a new route for the plan.

    Args:
        plan: Oracle plan
        request: The planning request
        maps: Places and directions provider
        clock: Wall clock for the ETA, route id and suggestions
        config: Optional routing configuration
        request_id: Identifier used in log lines

    Returns:
        RouteResponse with a freshly generated route id

    Raises:
        DestinationNotFoundError: If the destination search finds nothing
    """
    if config is None:
        config = DEFAULT_CONFIG
    _log = f"[request={request_id}] [graph=route_planner] [node=construct] "

    places = maps.text_search(
        plan.search_query,
        center=request.user_location,
        radius=config.destination_radius_m,
    )
    if not places:
        raise DestinationNotFoundError(
            f"No hiking locations found for: {plan.search_query}"
        )

    destination = places[0]
    logger.info(f"{_log}Found destination | name={destination.name}")

    segments: List[RouteSegment] = []

    outbound = _outbound_segment(plan, request, destination, maps, _log)
    if outbound is not None:
        segments.append(outbound)

    segments.append(
        hiking_segment(
            destination.name,
            plan.estimated_hiking_duration,
            pace_kmh=config.hiking_pace_kmh,
        )
    )

    if plan.requires_transit:
        inbound = _return_segment(request, destination, maps, _log)
        if inbound is not None:
            segments.append(inbound)

    route = finalize_route(
        route_id=generate_route_id(clock),
        name=f"{destination.name} Adventure",
        origin=request.user_location,
        destination=destination.location,
        waypoints=[
            Waypoint(
                lat=destination.location.lat,
                lng=destination.location.lng,
                name=destination.name,
            )
        ],
        segments=segments,
        now=clock(),
    )

    logger.info(
        f"{_log}Route built | route_id={route.route_id}, "
        f"segments={[s.mode for s in segments]}, total={route.metrics.total_min}min"
    )

    return RouteResponse(
        route=route,
        suggestions=enhance_suggestions(
            plan.suggestions,
            request.preferences,
            clock=clock,
            limit=config.max_suggestions,
        ),
    )
