"""
Typed prompt templates for the oracle planning step.

Prompts are structured as Pydantic models for validation, testability,
and easier version management.
"""

from typing import Optional, List
from pydantic import BaseModel, Field


SYSTEM_INSTRUCTION = """You are a hiking route planner assistant. Your job is to:
1. Understand the user's hiking query
2. Identify the destination (trailhead or hiking area)
3. Determine the best multi-modal route (transit + walking/hiking)
4. Provide helpful suggestions

When the user already has a route, decide how to modify it instead of
planning a new one. Respond with a JSON plan only."""


# =============================================================================
# Plan Prompt
# =============================================================================

PLAN_PROMPT_TEMPLATE = """User Query: "{query}"

User Location: {lat}, {lng}

User Preferences:
- Duration: {duration} hours
- Difficulty: {difficulty}
- Transport modes: {transport_modes}
- Avoid: {avoid}
- Accessibility needs: {accessibility}
{route_section}"""


CREATE_INSTRUCTIONS = """
Create a route plan that:
1. Finds the best hiking location matching their query
2. Plans transit from their location to the trailhead
3. Includes walking/hiking time at the destination
4. Provides helpful suggestions

Respond with ONLY this JSON structure:
{
  "action": "create_new",
  "destination": "Name of hiking area",
  "searchQuery": "Search term for Google Places",
  "requiresTransit": true/false,
  "estimatedHikingDuration": minutes,
  "suggestions": ["suggestion1", "suggestion2", "suggestion3"]
}"""


# =============================================================================
# Modification Prompt
# =============================================================================

MODIFY_INSTRUCTIONS = """
Current Route:
- Route ID: {route_id}
- Name: {route_name}
- Origin: {origin_lat}, {origin_lng}
- Destination: {destination_lat}, {destination_lng}
- Total time: {total_min} minutes
- Waypoints: {waypoint_count}
- Segments: {segment_count}

The user already has this route. Produce a MODIFICATION plan for it,
not a new route. Choose modifyType from:
- "add_waypoint" or "add_scenic_stop": add a stop along the way (searchQuery names the kind of stop)
- "exit_now": the user wants to head home right away
- "adjust_time": recompute timing for the same route

Respond with ONLY this JSON structure:
{{
  "action": "modify_existing",
  "modifyType": "add_waypoint" | "add_scenic_stop" | "exit_now" | "adjust_time",
  "destination": "Name of the stop or destination",
  "searchQuery": "Search term for Google Places",
  "requiresTransit": true/false,
  "estimatedHikingDuration": minutes,
  "keepOriginalDestination": true/false,
  "suggestions": ["suggestion1", "suggestion2"]
}}"""


class PlanPromptConfig(BaseModel):
    """
    Configuration for plan prompt generation.

    Validates the inputs needed to construct the user prompt.
    """

    query: str = Field(description="Free-text hiking query")
    lat: float = Field(description="User latitude")
    lng: float = Field(description="User longitude")
    duration: Optional[float] = Field(default=None)
    difficulty: Optional[str] = Field(default=None)
    transport_modes: List[str] = Field(default_factory=list)
    avoid: List[str] = Field(default_factory=list)
    accessibility: bool = False

    def format_prompt(self, route_section: str) -> str:
        """
        Format the plan template with this config's values.

        Args:
            route_section: Either the create instructions or the
                formatted modification instructions

        Returns:
            Formatted prompt string with all placeholders filled
        """
        return PLAN_PROMPT_TEMPLATE.format(
            query=self.query,
            lat=self.lat,
            lng=self.lng,
            duration=self.duration if self.duration is not None else "flexible",
            difficulty=self.difficulty or "any",
            transport_modes=", ".join(self.transport_modes) or "any",
            avoid=", ".join(self.avoid) or "nothing",
            accessibility="yes" if self.accessibility else "no",
            route_section=route_section,
        )
