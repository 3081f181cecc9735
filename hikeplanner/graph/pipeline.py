"""
Public entry point for route planning.

`plan_route` runs the route planner graph once and returns the finished
route, or raises. Partial results are never returned.
"""

import logging
import uuid
from typing import Optional

from hikeplanner.graph.build import create_route_planner_graph
from hikeplanner.graph.config import RoutePlannerGraphConfig, DEFAULT_CONFIG
from hikeplanner.graph.dependencies import PlannerDependencies
from hikeplanner.shared.contracts.route_output import RouteResponse
from hikeplanner.shared.contracts.route_request import PlanRequest
from hikeplanner.shared.errors import RoutePlanningError


logger = logging.getLogger(__name__)


def plan_route(
    request: PlanRequest,
    dependencies: Optional[PlannerDependencies] = None,
    config: Optional[RoutePlannerGraphConfig] = None,
    request_id: Optional[str] = None,
) -> RouteResponse:
    """
    Plan a new route or modify the request's current route.

    Args:
        request: Query, user location, preferences and optional current route
        dependencies: Oracle client, maps provider and clock
        config: Optional graph configuration
        request_id: Identifier for log correlation; generated when omitted

    Returns:
        RouteResponse with at most five suggestions

    Raises:
        RoutePlanningError: Any fatal planning or routing failure
    """
    if config is None:
        config = DEFAULT_CONFIG
    request_id = request_id or str(uuid.uuid4())
    _log = f"[request={request_id}] [graph=route_planner] [api=plan_route] "

    logger.info(
        f"{_log}Planning starting | query={request.query!r}, "
        f"has_current_route={request.current_route is not None}"
    )

    graph = create_route_planner_graph(dependencies, config)
    initial_state = {
        "request": request,
        "plan": None,
        "response": None,
        "current_step": "starting",
        "messages": [],
        "request_id": request_id,
    }

    final_state = graph.invoke(
        initial_state, {"recursion_limit": config.recursion_limit}
    )

    response = final_state.get("response")
    if response is None:
        raise RoutePlanningError(f"Route planner finished without a route ({request_id})")

    logger.info(
        f"{_log}Planning finished | route_id={response.route.route_id}, "
        f"total={response.route.metrics.total_min}min, "
        f"messages={len(final_state.get('messages', []))}"
    )
    return response
