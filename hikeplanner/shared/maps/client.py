"""
Google Maps client for places and directions.

Wraps `googlemaps.Client` and normalizes its results into the small shapes
the routing steps consume. Directions failures are reported as a non-OK
status rather than raised, so each caller can decide between failing the
request and omitting an optional leg.
"""

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import googlemaps
from googlemaps.exceptions import ApiError
from dotenv import load_dotenv
from pydantic import BaseModel, Field

from hikeplanner.shared.contracts.route_output import Point
from hikeplanner.shared.errors import MapsProviderError

load_dotenv()

logger = logging.getLogger(__name__)


class PlaceResult(BaseModel):
    """A place returned by a text or nearby search."""

    place_id: Optional[str] = None
    name: str
    formatted_address: Optional[str] = None
    location: Point
    rating: Optional[float] = None
    types: List[str] = Field(default_factory=list)


class DirectionsResult(BaseModel):
    """Provider status plus the raw provider routes."""

    status: str
    routes: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "OK" and len(self.routes) > 0

    def first_leg(self) -> Dict[str, Any]:
        return self.routes[0]["legs"][0]


def _place_from_result(result: Dict[str, Any], address_key: str) -> PlaceResult:
    location = result.get("geometry", {}).get("location", {})
    return PlaceResult(
        place_id=result.get("place_id"),
        name=result.get("name", ""),
        formatted_address=result.get(address_key),
        location=Point(lat=location.get("lat"), lng=location.get("lng")),
        rating=result.get("rating"),
        types=result.get("types") or [],
    )


class GoogleMapsClient:
    """
    Places and directions provider backed by the Google Maps web services.
    """

    def __init__(self, api_key: str = None, client: googlemaps.Client = None):
        if client is None:
            api_key = api_key or os.getenv("GOOGLE_MAPS_API_KEY")
            if not api_key:
                raise ValueError("Missing Google Maps API key")
            client = googlemaps.Client(key=api_key)
        self.client = client

    def text_search(
        self,
        query: str,
        center: Optional[Point] = None,
        radius: Optional[int] = None,
    ) -> List[PlaceResult]:
        """
        Search places by free text, ordered by provider relevance.

        An empty list means no results, not an error.
        """
        params: Dict[str, Any] = {"query": query}
        if center is not None:
            params["location"] = center.as_tuple()
        if radius:
            params["radius"] = radius

        try:
            data = self.client.places(**params)
        except ApiError as e:
            raise MapsProviderError(f"Places API error: {e.status}") from e

        return [
            _place_from_result(r, "formatted_address")
            for r in data.get("results", [])
        ]

    def nearby_search(
        self,
        center: Point,
        radius: int,
        category: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[PlaceResult]:
        """Search places around a point, optionally by type and keyword."""
        params: Dict[str, Any] = {"location": center.as_tuple(), "radius": radius}
        if category:
            params["type"] = category
        if keyword:
            params["keyword"] = keyword

        try:
            data = self.client.places_nearby(**params)
        except ApiError as e:
            raise MapsProviderError(f"Nearby search error: {e.status}") from e

        return [_place_from_result(r, "vicinity") for r in data.get("results", [])]

    def directions(
        self,
        origin: Point,
        destination: Point,
        mode: str = "walking",
        waypoints: Optional[Sequence[Point]] = None,
        departure_time: Optional[datetime] = None,
        alternatives: bool = False,
    ) -> DirectionsResult:
        """
        Request directions between two points.

        Never raises for provider-side rejections: a rejected request comes
        back with the provider status and no routes.
        """
        params: Dict[str, Any] = {"mode": mode, "alternatives": alternatives}
        if waypoints:
            params["waypoints"] = [w.as_tuple() for w in waypoints]
        if departure_time is not None:
            params["departure_time"] = departure_time

        try:
            routes = self.client.directions(
                origin.as_tuple(), destination.as_tuple(), **params
            )
        except ApiError as e:
            logger.warning(f"Directions request rejected | mode={mode}, status={e.status}")
            return DirectionsResult(status=e.status)

        if not routes:
            return DirectionsResult(status="ZERO_RESULTS")
        return DirectionsResult(status="OK", routes=routes)
