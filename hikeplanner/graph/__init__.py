"""
Top-level route planner graph.

Runs the planning oracle, then builds a new route or modifies the
caller's current one:
    request -> plan -> (construct | modify) -> done

`plan_route` is the single public operation.
"""

from hikeplanner.graph.build import create_route_planner_graph
from hikeplanner.graph.dependencies import PlannerDependencies
from hikeplanner.graph.pipeline import plan_route

__all__ = ["create_route_planner_graph", "PlannerDependencies", "plan_route"]
