"""Prompt templates and builders for the oracle planning step."""

from hikeplanner.planning.prompts.templates import (
    PlanPromptConfig,
    SYSTEM_INSTRUCTION,
)
from hikeplanner.planning.prompts.builders import (
    build_system_instruction,
    build_route_summary,
    build_plan_prompt,
)

__all__ = [
    "PlanPromptConfig",
    "SYSTEM_INSTRUCTION",
    "build_system_instruction",
    "build_route_summary",
    "build_plan_prompt",
]
