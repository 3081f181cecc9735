"""
Routing steps.

Turns a plan into a concrete route, either by building a new one or by
modifying the caller's current route, then adds contextual suggestions.
"""

from hikeplanner.routing.construction import create_route
from hikeplanner.routing.modification import (
    modify_route,
    add_waypoint,
    create_exit_route,
    adjust_timing,
)
from hikeplanner.routing.suggestions import enhance_suggestions

__all__ = [
    "create_route",
    "modify_route",
    "add_waypoint",
    "create_exit_route",
    "adjust_timing",
    "enhance_suggestions",
]
