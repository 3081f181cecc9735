"""
Route request contract.

Defines the immutable input to a single planning call.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from hikeplanner.shared.contracts.route_output import Point, Route


class Preferences(BaseModel):
    """Optional user preferences for the trip."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    duration: Optional[float] = Field(default=None, description="Trip length in hours")
    difficulty: Optional[Literal["easy", "moderate", "hard"]] = None
    transport_modes: List[str] = Field(
        default_factory=list,
        alias="transportModes",
        description="Allowed modes (e.g., 'transit', 'bicycling')",
    )
    avoid: List[str] = Field(default_factory=list)
    accessibility: bool = False

    def allows(self, mode: str) -> bool:
        return mode in self.transport_modes


class PlanRequest(BaseModel):
    """A free-text planning query with its context."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    query: str = Field(description="Free-text hiking query")
    user_location: Point = Field(alias="userLocation")
    preferences: Optional[Preferences] = None
    current_route: Optional[Route] = Field(
        default=None,
        alias="currentRoute",
        description="Existing route to modify, if any",
    )

    def allows(self, mode: str) -> bool:
        """Whether the caller's preferences include a transport mode."""
        return self.preferences is not None and self.preferences.allows(mode)
