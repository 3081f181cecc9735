"""
Context-aware suggestion enhancement.
"""

from typing import List, Optional

from hikeplanner.shared.clock import Clock, system_clock
from hikeplanner.shared.contracts.route_request import Preferences


EARLY_MORNING_TIP = "Early morning hiking offers cooler temperatures and fewer crowds"
LATE_START_TIP = "Consider starting earlier to ensure daylight for return journey"
ACCESSIBILITY_TIP = "This route has been optimized for accessibility"
TRANSIT_TIPS = [
    "Check transit schedules for return trip timing",
    "Keep transit pass/card easily accessible",
]

MAX_SUGGESTIONS = 5


def enhance_suggestions(
    base_suggestions: List[str],
    preferences: Optional[Preferences] = None,
    clock: Clock = system_clock,
    limit: int = MAX_SUGGESTIONS,
) -> List[str]:
    """
    Append time-of-day, accessibility and transit tips to the oracle's
    suggestions, keeping base suggestions first and capping the result.
    The cap never exceeds MAX_SUGGESTIONS, whatever `limit` asks for.

    Hours 6-8 add an early-morning tip; hours from 15 on add a daylight
    tip. Other hours add neither.
    """
    limit = min(limit, MAX_SUGGESTIONS)
    suggestions = list(base_suggestions)

    hour = clock().hour
    if 6 <= hour < 9:
        suggestions.append(EARLY_MORNING_TIP)
    elif hour >= 15:
        suggestions.append(LATE_START_TIP)

    if preferences is not None and preferences.accessibility:
        suggestions.append(ACCESSIBILITY_TIP)

    if preferences is not None and preferences.allows("transit"):
        suggestions.extend(TRANSIT_TIPS)

    return suggestions[:limit]
