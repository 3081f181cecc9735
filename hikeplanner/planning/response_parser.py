"""
Response parser for the oracle planning step.

Handles parsing of oracle responses, including JSON wrapped in
markdown code fences.
"""

import json
import logging
import re
from typing import Any, Dict

from hikeplanner.planning.schemas import Plan, DEFAULT_HIKING_MINUTES
from hikeplanner.shared.errors import PlanParseError


logger = logging.getLogger(__name__)

_CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*([\s\S]*?)\s*```$", re.IGNORECASE)


def strip_code_fences(raw_response: str) -> str:
    """
    Remove an optional markdown code fence around the response.

    Handles:
    - Raw JSON
    - JSON in markdown code blocks (```json ... ``` or ``` ... ```)
    - Leading/trailing whitespace

    Args:
        raw_response: Raw oracle response string

    Returns:
        The response body with fences removed
    """
    content = raw_response.strip()
    match = _CODE_FENCE_PATTERN.match(content)
    if match:
        content = match.group(1).strip()
    return content


def parse_plan_json(raw_response: str) -> Dict[str, Any]:
    """
    Parse the oracle response into a JSON object.

    Args:
        raw_response: Raw oracle response string

    Returns:
        Parsed JSON object

    Raises:
        PlanParseError: If the body is not valid JSON or not an object
    """
    json_str = strip_code_fences(raw_response)

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise PlanParseError(f"Invalid JSON from planning oracle: {e}\nContent: {json_str}")

    if not isinstance(data, dict):
        raise PlanParseError(
            f"Planning oracle returned {type(data).__name__}, expected a JSON object"
        )

    return data


def parse_plan_response(
    raw_response: str,
    default_hiking_minutes: int = DEFAULT_HIKING_MINUTES,
) -> Plan:
    """
    Parse an oracle response into a Plan with defaults filled in.

    Args:
        raw_response: Raw oracle response string
        default_hiking_minutes: Hiking duration used when the oracle omits one

    Returns:
        Plan record
    """
    data = parse_plan_json(raw_response)
    missing = {"action", "searchQuery", "estimatedHikingDuration"} - set(data)
    if missing:
        logger.debug(f"Plan missing fields, defaults applied: {sorted(missing)}")
    return Plan.from_oracle(data, default_hiking_minutes=default_hiking_minutes)
