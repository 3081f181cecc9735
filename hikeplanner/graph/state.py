"""
Route planner state schema.

Defines the state that flows through the route planner graph for a single
planning call. Nothing here outlives the call.
"""

from typing import TypedDict, List, Optional, Annotated
import operator

from hikeplanner.planning.schemas import Plan
from hikeplanner.shared.contracts.route_output import RouteResponse
from hikeplanner.shared.contracts.route_request import PlanRequest


class RoutePlannerState(TypedDict):
    """
    State schema for the route planner graph.

    The request is fixed for the whole run; `plan` is filled by the
    planning node and `response` by either the construction or the
    modification node.
    """

    # Input
    request: PlanRequest

    # Step outputs (populated as nodes complete)
    plan: Optional[Plan]
    response: Optional[RouteResponse]

    # Tracking
    current_step: str
    messages: Annotated[List[dict], operator.add]
    request_id: Optional[str]
