"""
FastAPI endpoints for the route planner.

Provides the API to plan or modify a hiking route from a free-text query,
and to review a user's past planning requests.
"""

import logging
import time
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field, field_validator

from hikeplanner.graph.dependencies import PlannerDependencies
from hikeplanner.graph.history import (
    GlobalStats,
    RequestHistory,
    RouteRequestRecord,
    UsageStats,
)
from hikeplanner.graph.pipeline import plan_route
from hikeplanner.shared.contracts.route_output import Point, Route, RouteResponse
from hikeplanner.shared.contracts.route_request import PlanRequest, Preferences
from hikeplanner.shared.errors import (
    DestinationNotFoundError,
    ExitRouteError,
    RecomputeRouteError,
    RoutePlanningError,
    WaypointNotFoundError,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/routes", tags=["routes"])

# Shared collaborators and history (replace with DI container / DB in production)
_dependencies: Optional[PlannerDependencies] = None
_history: Optional[RequestHistory] = None

_UNROUTABLE_ERRORS = (
    DestinationNotFoundError,
    WaypointNotFoundError,
    ExitRouteError,
    RecomputeRouteError,
)


def get_dependencies() -> PlannerDependencies:
    """Get or create the shared planner collaborators."""
    global _dependencies
    if _dependencies is None:
        _dependencies = PlannerDependencies()
    return _dependencies


def get_history() -> RequestHistory:
    """Get or create the shared request history."""
    global _history
    if _history is None:
        _history = RequestHistory()
    return _history


# ============================================================================
# Request/Response Models
# ============================================================================


class PlanRouteBody(BaseModel):
    """Request to plan or modify a route."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(
        default="anonymous", alias="userId", description="Requesting user"
    )
    query: str = Field(min_length=1, description="Free-text hiking query")
    user_location: Point = Field(alias="userLocation")
    preferences: Optional[Preferences] = None
    current_route: Optional[Route] = Field(
        default=None,
        alias="currentRoute",
        description="Route returned by an earlier call, to modify",
    )

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("query must not be blank")
        return value

    def to_plan_request(self) -> PlanRequest:
        return PlanRequest(
            query=self.query,
            user_location=self.user_location,
            preferences=self.preferences,
            current_route=self.current_route,
        )


class HistoryResponse(BaseModel):
    """A user's recent planning requests."""

    user_id: str
    requests: List[RouteRequestRecord] = Field(default_factory=list)


def _status_for(error: RoutePlanningError) -> int:
    if isinstance(error, _UNROUTABLE_ERRORS):
        return 422
    return 502


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/plan", response_model=RouteResponse)
def plan(
    body: PlanRouteBody,
    dependencies: PlannerDependencies = Depends(get_dependencies),
    history: RequestHistory = Depends(get_history),
):
    """
    Plan a new hiking route, or modify `currentRoute` when one is given.
    """
    request_id = str(uuid.uuid4())
    _log = f"[request={request_id}] [graph=route_planner] [api=plan] "
    logger.info(f"{_log}Request received | user={body.user_id}, query={body.query!r}")

    start_time = time.perf_counter()
    try:
        response = plan_route(
            body.to_plan_request(), dependencies=dependencies, request_id=request_id
        )
    except RoutePlanningError as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.error(f"{_log}Planning failed after {duration_ms:.0f}ms: {e}")
        history.record(
            request_id, body.user_id, body.query, False, duration_ms, error=str(e)
        )
        raise HTTPException(status_code=_status_for(e), detail=str(e))
    except Exception as e:
        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.exception(f"{_log}Pipeline failed: {e}")
        history.record(
            request_id, body.user_id, body.query, False, duration_ms, error=str(e)
        )
        raise HTTPException(
            status_code=500,
            detail=f"Route planning failed: {str(e)}",
        )

    duration_ms = (time.perf_counter() - start_time) * 1000
    history.record(
        request_id,
        body.user_id,
        body.query,
        True,
        duration_ms,
        route_name=response.route.name,
    )
    logger.info(f"{_log}Planning completed in {duration_ms:.0f}ms")
    return response


@router.get("/history/{user_id}", response_model=HistoryResponse)
def request_history(
    user_id: str,
    limit: int = 50,
    history: RequestHistory = Depends(get_history),
):
    """Most recent planning requests for a user."""
    return HistoryResponse(user_id=user_id, requests=history.history(user_id, limit))


@router.get("/stats/{user_id}", response_model=UsageStats)
def usage_stats(user_id: str, history: RequestHistory = Depends(get_history)):
    """Success rate and timing for one user's requests."""
    return history.usage_stats(user_id)


@router.get("/stats", response_model=GlobalStats)
def global_stats(history: RequestHistory = Depends(get_history)):
    """Aggregates across all users."""
    return history.global_stats()
