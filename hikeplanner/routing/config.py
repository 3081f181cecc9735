"""
Configuration for route construction and modification.

Centralizes the search radii, pacing and limits used by the routing
steps so they can be tuned without touching the algorithms.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class RoutingConfig:
    """
    Configuration for the routing steps.

    Attributes:
        destination_radius_m: Text search radius around the user
        waypoint_radius_m: Nearby search radius around the route midpoint
        waypoint_category: Place type used for scenic stops
        hiking_pace_kmh: Pace used to estimate hiking distance
        max_suggestions: Cap on suggestions returned to the user
    """

    destination_radius_m: int = 50_000
    waypoint_radius_m: int = 10_000
    waypoint_category: str = "tourist_attraction"
    hiking_pace_kmh: float = 3.0
    max_suggestions: int = 5


# Default configuration instance
DEFAULT_CONFIG = RoutingConfig()


def get_config(
    destination_radius_m: Optional[int] = None,
    waypoint_radius_m: Optional[int] = None,
    waypoint_category: Optional[str] = None,
    hiking_pace_kmh: Optional[float] = None,
    max_suggestions: Optional[int] = None,
) -> RoutingConfig:
    """Create a routing configuration with optional overrides."""
    return RoutingConfig(
        destination_radius_m=destination_radius_m
        or DEFAULT_CONFIG.destination_radius_m,
        waypoint_radius_m=waypoint_radius_m or DEFAULT_CONFIG.waypoint_radius_m,
        waypoint_category=waypoint_category or DEFAULT_CONFIG.waypoint_category,
        hiking_pace_kmh=hiking_pace_kmh or DEFAULT_CONFIG.hiking_pace_kmh,
        max_suggestions=max_suggestions or DEFAULT_CONFIG.max_suggestions,
    )
