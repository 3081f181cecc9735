"""
Hiking route planner.

This package contains:
- shared/: Common infrastructure (LLM client, maps client, logging, contracts, errors)
- planning/: Oracle planning step (query -> structured plan)
- routing/: Route construction, modification and suggestions
- graph/: Top-level route planner graph and HTTP router
"""

from hikeplanner.graph.build import create_route_planner_graph
from hikeplanner.graph.pipeline import plan_route

__all__ = ["create_route_planner_graph", "plan_route"]
