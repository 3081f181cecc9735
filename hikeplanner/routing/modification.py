"""
Route modification.

Applies one modification to an existing route. The kind of change is the
plan's `modifyType`, dispatched through a closed table of handlers:

    add_waypoint / add_scenic_stop -> add_waypoint      (keeps route_id)
    exit_now                       -> create_exit_route (route_id "exit-<id>")
    adjust_time                    -> adjust_timing     (keeps route_id)
    anything else                  -> create_route      (fresh route_id)

Unlike construction, every provider failure here is fatal. Departure times
are read before the directions request; ETAs are based on the clock read
once the segments are final, as in construction.
"""

import logging
from typing import Callable, Dict, List, Optional

from hikeplanner.planning.schemas import ModifyType, Plan
from hikeplanner.routing.aggregator import (
    finalize_route,
    segment_from_leg,
    segments_from_route,
    transit_instructions,
)
from hikeplanner.routing.config import RoutingConfig, DEFAULT_CONFIG
from hikeplanner.routing.construction import create_route
from hikeplanner.routing.suggestions import enhance_suggestions
from hikeplanner.shared.clock import Clock, system_clock
from hikeplanner.shared.contracts.route_output import (
    Point,
    Route,
    RouteResponse,
    Waypoint,
)
from hikeplanner.shared.contracts.route_request import PlanRequest
from hikeplanner.shared.errors import (
    ExitRouteError,
    RecomputeRouteError,
    WaypointNotFoundError,
)
from hikeplanner.shared.maps.client import GoogleMapsClient


logger = logging.getLogger(__name__)

EXIT_ROUTE_NAME = "Exit Route to Home"
EXIT_PREFIX = "Return home"


def midpoint(a: Point, b: Point) -> Point:
    """Coordinate midpoint of two points."""
    return Point(lat=(a.lat + b.lat) / 2, lng=(a.lng + b.lng) / 2)


def route_mode(request: PlanRequest) -> str:
    return "transit" if request.allows("transit") else "walking"


def _enhanced(
    suggestions: List[str],
    request: PlanRequest,
    clock: Clock,
    config: RoutingConfig,
) -> List[str]:
    return enhance_suggestions(
        suggestions, request.preferences, clock=clock, limit=config.max_suggestions
    )


def add_waypoint(
    plan: Plan,
    request: PlanRequest,
    route: Route,
    maps: GoogleMapsClient,
    clock: Clock = system_clock,
    config: Optional[RoutingConfig] = None,
    request_id: str = "unknown",
) -> RouteResponse:
    """
    Add a scenic stop near the middle of the route.

    Searches for an attraction around the origin/destination midpoint,
    then recomputes directions through it. The route keeps its id.

    Raises:
        WaypointNotFoundError: If no stop is found near the midpoint
        RecomputeRouteError: If directions through the stop fail
    """
    if config is None:
        config = DEFAULT_CONFIG
    _log = f"[request={request_id}] [graph=route_planner] [node=modify:add_waypoint] "

    center = midpoint(route.origin, route.destination)
    places = maps.nearby_search(
        center,
        config.waypoint_radius_m,
        category=config.waypoint_category,
        keyword=plan.search_query,
    )
    if not places:
        raise WaypointNotFoundError(
            f"No scenic stops found for '{plan.search_query}' along route {route.route_id}"
        )

    stop = places[0]
    logger.info(f"{_log}Found stop | name={stop.name}")

    mode = route_mode(request)
    result = maps.directions(
        route.origin, route.destination, mode=mode, waypoints=[stop.location]
    )
    if not result.ok:
        raise RecomputeRouteError(
            f"Could not route {route.route_id} via {stop.name}: {result.status}"
        )

    segments = segments_from_route(result.routes[0], mode)
    waypoints = list(route.waypoints) + [
        Waypoint(lat=stop.location.lat, lng=stop.location.lng, name=stop.name)
    ]

    updated = finalize_route(
        route_id=route.route_id,
        name=f"{route.name} via {stop.name}",
        origin=route.origin,
        destination=route.destination,
        waypoints=waypoints,
        segments=segments,
        now=clock(),
    )

    suggestions = [f"Added scenic stop: {stop.name}"] + plan.suggestions
    return RouteResponse(
        route=updated, suggestions=_enhanced(suggestions, request, clock, config)
    )


def create_exit_route(
    plan: Plan,
    request: PlanRequest,
    route: Route,
    maps: GoogleMapsClient,
    clock: Clock = system_clock,
    config: Optional[RoutingConfig] = None,
    request_id: str = "unknown",
) -> RouteResponse:
    """
    Route the user home by transit from wherever they are now.

    The route's origin is treated as home. The result is a single transit
    segment with id "exit-<route_id>" and no waypoints.

    Raises:
        ExitRouteError: If no transit route home is available
    """
    if config is None:
        config = DEFAULT_CONFIG
    _log = f"[request={request_id}] [graph=route_planner] [node=modify:exit_now] "

    departure = clock()
    home = route.origin
    result = maps.directions(
        request.user_location,
        home,
        mode="transit",
        departure_time=departure,
    )
    if not result.ok:
        raise ExitRouteError(
            f"No transit route home found for route {route.route_id}: {result.status}"
        )

    leg = result.first_leg()
    segment = segment_from_leg(
        leg, "transit", instructions=transit_instructions(leg, EXIT_PREFIX)
    )
    logger.info(f"{_log}Exit route ready | duration={segment.duration}min")

    exit_route = finalize_route(
        route_id=f"exit-{route.route_id}",
        name=EXIT_ROUTE_NAME,
        origin=request.user_location,
        destination=home,
        waypoints=[],
        segments=[segment],
        now=clock(),
    )
    return RouteResponse(
        route=exit_route,
        suggestions=_enhanced(plan.suggestions, request, clock, config),
    )


def adjust_timing(
    plan: Plan,
    request: PlanRequest,
    route: Route,
    maps: GoogleMapsClient,
    clock: Clock = system_clock,
    config: Optional[RoutingConfig] = None,
    request_id: str = "unknown",
) -> RouteResponse:
    """
    Recompute directions for the same origin, destination and waypoints.

    This is a full recomputation rather than a patch, since provider-side
    timing may have changed. Id, name and waypoints are kept.

    Raises:
        RecomputeRouteError: If the provider cannot route it any more
    """
    if config is None:
        config = DEFAULT_CONFIG
    _log = f"[request={request_id}] [graph=route_planner] [node=modify:adjust_time] "

    departure = clock()
    mode = route_mode(request)
    result = maps.directions(
        route.origin,
        route.destination,
        mode=mode,
        waypoints=[Point(lat=w.lat, lng=w.lng) for w in route.waypoints],
        departure_time=departure,
    )
    if not result.ok:
        raise RecomputeRouteError(
            f"Could not recompute route {route.route_id}: {result.status}"
        )

    segments = segments_from_route(result.routes[0], mode)
    logger.info(f"{_log}Timing recomputed | legs={len(segments)}")

    updated = finalize_route(
        route_id=route.route_id,
        name=route.name,
        origin=route.origin,
        destination=route.destination,
        waypoints=route.waypoints,
        segments=segments,
        now=clock(),
    )
    return RouteResponse(
        route=updated,
        suggestions=_enhanced(plan.suggestions, request, clock, config),
    )


ModificationHandler = Callable[..., RouteResponse]

MODIFICATION_HANDLERS: Dict[ModifyType, ModificationHandler] = {
    ModifyType.ADD_WAYPOINT: add_waypoint,
    ModifyType.ADD_SCENIC_STOP: add_waypoint,
    ModifyType.EXIT_NOW: create_exit_route,
    ModifyType.ADJUST_TIME: adjust_timing,
}


def modify_route(
    plan: Plan,
    request: PlanRequest,
    maps: GoogleMapsClient,
    clock: Clock = system_clock,
    config: Optional[RoutingConfig] = None,
    request_id: str = "unknown",
) -> RouteResponse:
    """
    Apply the plan's modification to the request's current route.

    Unrecognized modification kinds (and a missing current route) fall
    back to building a brand-new route.
    """
    _log = f"[request={request_id}] [graph=route_planner] [node=modify] "
    route = request.current_route
    modify_type = ModifyType.parse(plan.modify_type)

    if route is None or modify_type is None:
        logger.warning(
            f"{_log}Falling back to new route | modify_type={plan.modify_type!r}, "
            f"has_current_route={route is not None}"
        )
        return create_route(
            plan, request, maps, clock=clock, config=config, request_id=request_id
        )

    logger.info(
        f"{_log}Dispatching | modify_type={modify_type.value}, route_id={route.route_id}"
    )
    handler = MODIFICATION_HANDLERS[modify_type]
    return handler(
        plan,
        request,
        route,
        maps,
        clock=clock,
        config=config,
        request_id=request_id,
    )
