"""Node functions for the oracle planning step."""

from hikeplanner.planning.nodes.planning import generate_plan, plan_node

__all__ = ["generate_plan", "plan_node"]
