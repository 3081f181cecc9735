"""
Route output contract.

Defines the structured route returned to callers. A returned route can be
fed back as `currentRoute` on a later request to modify it.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Point(BaseModel):
    """A geographic coordinate."""

    lat: float = Field(description="Latitude in degrees")
    lng: float = Field(description="Longitude in degrees")

    def as_tuple(self):
        return (self.lat, self.lng)


class Waypoint(Point):
    """A named stop along the route."""

    name: Optional[str] = Field(default=None, description="Place name")


class RouteSegment(BaseModel):
    """A single leg of travel, in travel order."""

    mode: str = Field(
        description="Travel mode (e.g., 'transit', 'walking', 'bicycling', 'hiking')"
    )
    instructions: str = Field(description="Human-readable instructions")
    distance: float = Field(ge=0, description="Distance in km")
    duration: int = Field(ge=0, description="Duration in whole minutes")
    waypoints: Optional[List[Point]] = Field(
        default=None, description="Step start locations along the segment"
    )


class RouteMetrics(BaseModel):
    """Aggregated totals for a route."""

    model_config = ConfigDict(populate_by_name=True)

    total_min: int = Field(
        alias="totalMin", ge=0, description="Sum of all segment durations"
    )
    eta_arrival: datetime = Field(
        alias="etaArrival", description="Capture time plus total_min"
    )


class Route(BaseModel):
    """A complete multi-modal hiking route."""

    model_config = ConfigDict(populate_by_name=True)

    route_id: str = Field(description="Identity used to correlate modifications")
    name: str = Field(description="Display name")
    origin: Point = Field(description="Where the trip starts (home)")
    destination: Point = Field(description="Hiking destination")
    waypoints: List[Waypoint] = Field(default_factory=list)
    segments: List[RouteSegment] = Field(default_factory=list)
    metrics: RouteMetrics


class RouteResponse(BaseModel):
    """Result of one planning call."""

    route: Route
    suggestions: List[str] = Field(default_factory=list, max_length=5)
