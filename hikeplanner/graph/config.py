"""
Graph configuration for the route planner.

Bundles the planning and routing configurations with graph limits.
"""

from dataclasses import dataclass, field
from typing import Optional

from hikeplanner.planning.config import PlanningConfig
from hikeplanner.routing.config import RoutingConfig


@dataclass
class RoutePlannerGraphConfig:
    """
    Configuration for the route planner graph.

    Attributes:
        recursion_limit: Maximum number of graph steps
        planning: Oracle planning configuration
        routing: Route construction/modification configuration
    """

    recursion_limit: int = 10
    planning: PlanningConfig = field(default_factory=PlanningConfig)
    routing: RoutingConfig = field(default_factory=RoutingConfig)


# Default configuration instance
DEFAULT_CONFIG = RoutePlannerGraphConfig()


def get_config(
    recursion_limit: Optional[int] = None,
    planning: Optional[PlanningConfig] = None,
    routing: Optional[RoutingConfig] = None,
) -> RoutePlannerGraphConfig:
    """Create a graph configuration with optional overrides."""
    return RoutePlannerGraphConfig(
        recursion_limit=recursion_limit or DEFAULT_CONFIG.recursion_limit,
        planning=planning or DEFAULT_CONFIG.planning,
        routing=routing or DEFAULT_CONFIG.routing,
    )
