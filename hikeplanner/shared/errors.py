"""
Error taxonomy for route planning.

Every fatal condition aborts the whole planning call. Soft omissions of
optional legs are not errors and never surface here.
"""


class RoutePlanningError(Exception):
    """Base class for all route planning failures."""

    pass


class PlanParseError(RoutePlanningError):
    """Raised when the oracle output is not a valid JSON object."""

    pass


class OracleResponseError(RoutePlanningError):
    """Raised when the planning oracle returns no usable content."""

    pass


class MapsProviderError(RoutePlanningError):
    """Raised when a places search is rejected by the maps provider."""

    pass


class DestinationNotFoundError(RoutePlanningError):
    """Raised when the destination text search returns no places."""

    pass


class WaypointNotFoundError(RoutePlanningError):
    """Raised when no scenic stop is found near the route midpoint."""

    pass


class ExitRouteError(RoutePlanningError):
    """Raised when no transit route home can be found."""

    pass


class RecomputeRouteError(RoutePlanningError):
    """Raised when directions for an existing route cannot be recomputed."""

    pass
