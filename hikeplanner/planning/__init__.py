"""
Oracle planning step.

Turns a free-text hiking query plus its context into a structured Plan.
When the request carries an existing route, the oracle is asked for a
modification plan instead of a new one.
"""

from hikeplanner.planning.schemas import Plan, PlanAction, ModifyType
from hikeplanner.planning.nodes.planning import generate_plan, plan_node

__all__ = ["Plan", "PlanAction", "ModifyType", "generate_plan", "plan_node"]
