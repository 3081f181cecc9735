"""
Planning node for the route planner graph.

Calls the planning oracle to turn a free-text query into a structured
plan. No retry happens here; transport retries live in the LLM client.
"""

import logging
import time
from typing import Any, Dict, Optional

from openai import OpenAI

from hikeplanner.planning.config import PlanningConfig, DEFAULT_CONFIG
from hikeplanner.planning.prompts.builders import (
    build_plan_prompt,
    build_system_instruction,
)
from hikeplanner.planning.response_parser import parse_plan_response
from hikeplanner.planning.schemas import Plan
from hikeplanner.shared.contracts.route_request import PlanRequest
from hikeplanner.shared.errors import PlanParseError
from hikeplanner.shared.llm.client import generate_structured_response


logger = logging.getLogger(__name__)


def generate_plan(
    request: PlanRequest,
    client: Optional[OpenAI] = None,
    config: Optional[PlanningConfig] = None,
    request_id: str = "unknown",
) -> Plan:
    """
    Ask the oracle for a plan covering this request.

    Args:
        request: The planning request
        client: Optional OpenAI client. If not provided, uses cached client.
        config: Optional planning configuration
        request_id: Identifier used in log lines

    Returns:
        Plan with defaults filled in

    Raises:
        PlanParseError: If the oracle output is not a JSON object
        OracleResponseError: If the oracle returned nothing
    """
    if config is None:
        config = DEFAULT_CONFIG
    _log = f"[request={request_id}] [graph=route_planner] [node=plan] "

    prompt = build_plan_prompt(request)
    system_instruction = build_system_instruction()

    logger.info(
        f"{_log}Calling oracle | model={config.model}, "
        f"modifying={request.current_route is not None}"
    )

    start_time = time.perf_counter()
    raw_response = generate_structured_response(
        prompt,
        system_instruction=system_instruction,
        temperature=config.temperature,
        model=config.model,
        client=client,
    )
    duration_ms = (time.perf_counter() - start_time) * 1000
    logger.info(f"{_log}Oracle responded | duration={duration_ms:.0f}ms")

    try:
        plan = parse_plan_response(
            raw_response, default_hiking_minutes=config.default_hiking_minutes
        )
    except PlanParseError as e:
        logger.error(f"{_log}Parse error: {e}")
        raise

    logger.info(
        f"{_log}Plan ready | action={plan.action}, modify_type={plan.modify_type}, "
        f"search_query={plan.search_query!r}, transit={plan.requires_transit}, "
        f"hiking={plan.estimated_hiking_duration}min"
    )
    return plan


def plan_node(
    state: Dict[str, Any],
    client: Optional[OpenAI] = None,
    config: Optional[PlanningConfig] = None,
) -> Dict[str, Any]:
    """
    Graph node that populates `plan` from the request.

    Args:
        state: Current route planner state
        client: Optional OpenAI client
        config: Optional planning configuration

    Returns:
        Dictionary with state updates including the plan
    """
    request_id = state.get("request_id") or "unknown"
    plan = generate_plan(
        state["request"], client=client, config=config, request_id=request_id
    )

    return {
        "plan": plan,
        "current_step": "planned",
        "messages": [
            {
                "role": "system",
                "agent": "planner",
                "content": (
                    f"Plan generated: action={plan.action}, "
                    f"destination='{plan.destination}'"
                ),
            }
        ],
    }
