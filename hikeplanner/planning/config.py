"""
Configuration for the oracle planning step.
"""

from dataclasses import dataclass
from typing import Optional

from hikeplanner.planning.schemas import DEFAULT_HIKING_MINUTES
from hikeplanner.shared.llm.client import DEFAULT_MODEL


@dataclass
class PlanningConfig:
    """
    Configuration for the planning oracle call.

    Attributes:
        model: Oracle model identifier
        temperature: Sampling temperature for plan generation
        default_hiking_minutes: Hiking duration when the plan omits one
    """

    model: str = DEFAULT_MODEL
    temperature: float = 0.2
    default_hiking_minutes: int = DEFAULT_HIKING_MINUTES


# Default configuration instance
DEFAULT_CONFIG = PlanningConfig()


def get_config(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    default_hiking_minutes: Optional[int] = None,
) -> PlanningConfig:
    """Create a planning configuration with optional overrides."""
    return PlanningConfig(
        model=model or DEFAULT_CONFIG.model,
        temperature=temperature
        if temperature is not None
        else DEFAULT_CONFIG.temperature,
        default_hiking_minutes=default_hiking_minutes
        or DEFAULT_CONFIG.default_hiking_minutes,
    )
