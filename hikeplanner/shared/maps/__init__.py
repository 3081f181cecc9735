"""Maps provider utilities."""

from hikeplanner.shared.maps.client import (
    GoogleMapsClient,
    PlaceResult,
    DirectionsResult,
)

__all__ = ["GoogleMapsClient", "PlaceResult", "DirectionsResult"]
