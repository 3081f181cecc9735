"""
Routing logic for the route planner graph.

Chooses between building a new route and modifying the current one,
based on the plan's action.
"""

import logging
from typing import Literal

from hikeplanner.graph.state import RoutePlannerState


logger = logging.getLogger(__name__)


def route_by_action(
    state: RoutePlannerState,
) -> Literal["construct_node", "modify_node"]:
    """
    Determine which routing node runs after planning.

    Routing logic:
    1. Plan asks to modify and the request carries a route -> modify
    2. Plan asks to modify but there is no route -> construct (warning)
    3. Anything else -> construct

    Args:
        state: Current route planner state

    Returns:
        Name of the next node to execute
    """
    request_id = state.get("request_id") or "unknown"
    plan = state["plan"]
    has_route = state["request"].current_route is not None
    _log = f"[request={request_id}] [graph=route_planner] [router=route_by_action] "

    if plan.is_modification and has_route:
        logger.info(
            f"{_log}Routing to 'modify_node' | "
            f"action={plan.action}, modify_type={plan.modify_type}"
        )
        return "modify_node"

    if plan.is_modification:
        logger.warning(
            f"{_log}Modification requested without a current route, "
            f"routing to 'construct_node'"
        )
        return "construct_node"

    logger.info(
        f"{_log}Routing to 'construct_node' | "
        f"action={plan.action}, has_current_route={has_route}"
    )
    return "construct_node"
