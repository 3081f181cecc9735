"""
Schemas for the oracle planning step.

The oracle's JSON is untyped. `Plan.from_oracle` converts it into a record
with explicit defaults; field types are coerced best-effort, never
validated, so every field is a hint.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


DEFAULT_HIKING_MINUTES = 120


class PlanAction(str, Enum):
    """What the oracle wants done."""

    CREATE_NEW = "create_new"
    MODIFY_EXISTING = "modify_existing"


class ModifyType(str, Enum):
    """Closed set of modifications that can be applied to an existing route."""

    ADD_WAYPOINT = "add_waypoint"
    ADD_SCENIC_STOP = "add_scenic_stop"
    EXIT_NOW = "exit_now"
    ADJUST_TIME = "adjust_time"

    @classmethod
    def parse(cls, value: Any) -> Optional["ModifyType"]:
        """Return the matching variant, or None for anything unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


def _as_minutes(value: Any, default: int) -> int:
    try:
        minutes = int(round(float(value)))
    except (TypeError, ValueError):
        return default
    return minutes if minutes > 0 else default


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)


@dataclass(frozen=True)
class Plan:
    """
    Structured intent produced by the planning oracle.

    Attributes:
        action: Raw action string ("create_new" or "modify_existing")
        destination: Name of the hiking area
        search_query: Places search term for the destination or stop
        requires_transit: Whether the trip should use transit legs
        estimated_hiking_duration: Minutes on the trail
        modify_type: Raw modification kind, unvalidated
        keep_original_destination: Oracle hint, informational only
        suggestions: Oracle tips for the user
        raw: The parsed oracle JSON as received
    """

    action: str = PlanAction.CREATE_NEW.value
    destination: str = ""
    search_query: str = ""
    requires_transit: bool = False
    estimated_hiking_duration: int = DEFAULT_HIKING_MINUTES
    modify_type: Optional[str] = None
    keep_original_destination: Optional[bool] = None
    suggestions: List[str] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_modification(self) -> bool:
        return self.action == PlanAction.MODIFY_EXISTING.value

    @classmethod
    def from_oracle(
        cls,
        raw: Dict[str, Any],
        default_hiking_minutes: int = DEFAULT_HIKING_MINUTES,
    ) -> "Plan":
        """Build a plan from oracle JSON, filling every missing field."""
        destination = str(raw.get("destination") or "")
        suggestions = raw.get("suggestions")
        if not isinstance(suggestions, list):
            suggestions = []

        keep = raw.get("keepOriginalDestination")

        return cls(
            action=str(raw.get("action") or PlanAction.CREATE_NEW.value),
            destination=destination,
            search_query=str(raw.get("searchQuery") or destination),
            requires_transit=_as_bool(raw.get("requiresTransit", False)),
            estimated_hiking_duration=_as_minutes(
                raw.get("estimatedHikingDuration"), default_hiking_minutes
            ),
            modify_type=raw.get("modifyType"),
            keep_original_destination=None if keep is None else _as_bool(keep),
            suggestions=[str(s) for s in suggestions if s is not None],
            raw=dict(raw),
        )
