"""Request and route contracts shared by all planning steps."""

from hikeplanner.shared.contracts.route_output import (
    Point,
    Waypoint,
    RouteSegment,
    RouteMetrics,
    Route,
    RouteResponse,
)
from hikeplanner.shared.contracts.route_request import Preferences, PlanRequest

__all__ = [
    "Point",
    "Waypoint",
    "RouteSegment",
    "RouteMetrics",
    "Route",
    "RouteResponse",
    "Preferences",
    "PlanRequest",
]
