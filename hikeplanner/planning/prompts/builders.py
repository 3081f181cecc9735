"""
Prompt builders for the oracle planning step.

These functions construct the actual prompts sent to the oracle
based on the planning request.
"""

from hikeplanner.planning.prompts.templates import (
    PlanPromptConfig,
    SYSTEM_INSTRUCTION,
    CREATE_INSTRUCTIONS,
    MODIFY_INSTRUCTIONS,
)
from hikeplanner.shared.contracts.route_output import Route
from hikeplanner.shared.contracts.route_request import PlanRequest


def build_system_instruction() -> str:
    return SYSTEM_INSTRUCTION


def build_route_summary(route: Route) -> str:
    """
    Summarize an existing route and ask for a modification plan.

    Args:
        route: The caller's current route

    Returns:
        Formatted modification section of the prompt
    """
    return MODIFY_INSTRUCTIONS.format(
        route_id=route.route_id,
        route_name=route.name,
        origin_lat=route.origin.lat,
        origin_lng=route.origin.lng,
        destination_lat=route.destination.lat,
        destination_lng=route.destination.lng,
        total_min=route.metrics.total_min,
        waypoint_count=len(route.waypoints),
        segment_count=len(route.segments),
    )


def build_plan_prompt(request: PlanRequest) -> str:
    """
    Build the user prompt for the planning oracle.

    Embeds the query, location and preferences. When the request carries
    a current route, the prompt asks for a modification plan instead of a
    new one.

    Args:
        request: The planning request

    Returns:
        Complete user prompt string
    """
    prefs = request.preferences
    config = PlanPromptConfig(
        query=request.query,
        lat=request.user_location.lat,
        lng=request.user_location.lng,
        duration=prefs.duration if prefs else None,
        difficulty=prefs.difficulty if prefs else None,
        transport_modes=list(prefs.transport_modes) if prefs else [],
        avoid=list(prefs.avoid) if prefs else [],
        accessibility=prefs.accessibility if prefs else False,
    )

    if request.current_route is not None:
        route_section = build_route_summary(request.current_route)
    else:
        route_section = CREATE_INSTRUCTIONS

    return config.format_prompt(route_section)
