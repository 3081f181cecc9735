"""
Route planner graph construction.

Builds the graph that runs the planning oracle and then either builds a
new route or modifies the current one. Node wrappers close over the
collaborators so the node functions stay plain.
"""

import logging
from typing import Any, Dict, Optional

from langgraph.graph import StateGraph, END

from hikeplanner.graph.config import RoutePlannerGraphConfig, DEFAULT_CONFIG
from hikeplanner.graph.dependencies import PlannerDependencies
from hikeplanner.graph.router import route_by_action
from hikeplanner.graph.state import RoutePlannerState
from hikeplanner.planning.nodes.planning import plan_node
from hikeplanner.routing.construction import create_route
from hikeplanner.routing.modification import modify_route
from hikeplanner.shared.logging.config import log_state_transition


logger = logging.getLogger(__name__)


def _route_update(response, step: str, agent: str) -> Dict[str, Any]:
    route = response.route
    return {
        "response": response,
        "current_step": step,
        "messages": [
            {
                "role": "system",
                "agent": agent,
                "content": (
                    f"Route '{route.name}' ({route.route_id}): "
                    f"{len(route.segments)} segments, {route.metrics.total_min} min"
                ),
            }
        ],
    }


def create_route_planner_graph(
    dependencies: Optional[PlannerDependencies] = None,
    config: Optional[RoutePlannerGraphConfig] = None,
):
    """
    Create and compile the route planner graph.

    The graph structure is:
        Entry -> plan_node -> route_by_action
          -> "construct_node" -> complete -> END
          -> "modify_node"    -> complete -> END

    Args:
        dependencies: Collaborators. Defaults are built from the environment.
        config: Optional configuration. Uses DEFAULT_CONFIG if not provided.

    Returns:
        Compiled LangGraph application ready for execution.
    """
    if dependencies is None:
        dependencies = PlannerDependencies()
    if config is None:
        config = DEFAULT_CONFIG

    def _plan_wrapper(state: RoutePlannerState) -> Dict[str, Any]:
        request_id = state.get("request_id") or "unknown"
        _log = f"[request={request_id}] [graph=route_planner] [node=plan_wrapper] "
        logger.info(f"{_log}Entering node | query={state['request'].query!r}")

        try:
            result = plan_node(
                state, client=dependencies.llm_client, config=config.planning
            )
        except Exception as e:
            logger.exception(f"{_log}Planning failed: {e}")
            raise

        log_state_transition("plan_generated", {**state, **result})
        return result

    def _construct_wrapper(state: RoutePlannerState) -> Dict[str, Any]:
        request_id = state.get("request_id") or "unknown"
        _log = f"[request={request_id}] [graph=route_planner] [node=construct_wrapper] "
        logger.info(f"{_log}Entering node | search_query={state['plan'].search_query!r}")

        try:
            response = create_route(
                state["plan"],
                state["request"],
                dependencies.get_maps(),
                clock=dependencies.clock,
                config=config.routing,
                request_id=request_id,
            )
        except Exception as e:
            logger.exception(f"{_log}Route construction failed: {e}")
            raise

        result = _route_update(response, "constructed", "construction")
        log_state_transition("route_constructed", {**state, **result})
        return result

    def _modify_wrapper(state: RoutePlannerState) -> Dict[str, Any]:
        request_id = state.get("request_id") or "unknown"
        _log = f"[request={request_id}] [graph=route_planner] [node=modify_wrapper] "
        logger.info(
            f"{_log}Entering node | modify_type={state['plan'].modify_type}, "
            f"route_id={state['request'].current_route.route_id}"
        )

        try:
            response = modify_route(
                state["plan"],
                state["request"],
                dependencies.get_maps(),
                clock=dependencies.clock,
                config=config.routing,
                request_id=request_id,
            )
        except Exception as e:
            logger.exception(f"{_log}Route modification failed: {e}")
            raise

        result = _route_update(response, "modified", "modification")
        log_state_transition("route_modified", {**state, **result})
        return result

    def _complete_node(state: RoutePlannerState) -> Dict[str, Any]:
        request_id = state.get("request_id") or "unknown"
        _log = f"[request={request_id}] [graph=route_planner] [node=complete] "
        response = state["response"]

        logger.info(
            f"{_log}Pipeline complete | route_id={response.route.route_id}, "
            f"suggestions={len(response.suggestions)} -> END"
        )

        return {
            "current_step": "complete",
            "messages": [
                {
                    "role": "system",
                    "agent": "orchestrator",
                    "content": f"Pipeline complete. Route: {response.route.name}.",
                }
            ],
        }

    graph = StateGraph(RoutePlannerState)

    graph.add_node("plan_node", _plan_wrapper)
    graph.add_node("construct_node", _construct_wrapper)
    graph.add_node("modify_node", _modify_wrapper)
    graph.add_node("complete", _complete_node)

    graph.set_entry_point("plan_node")
    graph.add_conditional_edges(
        "plan_node",
        route_by_action,
        {
            "construct_node": "construct_node",
            "modify_node": "modify_node",
        },
    )
    graph.add_edge("construct_node", "complete")
    graph.add_edge("modify_node", "complete")
    graph.add_edge("complete", END)

    app = graph.compile()

    return app
