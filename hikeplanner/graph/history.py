"""
In-memory request history for route planning calls.

Keeps one record per planning call made through the API so users can
review past queries and usage statistics. Process-local only; replace
with a database-backed store for multi-process deployments.
"""

import threading
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel

from hikeplanner.shared.clock import Clock, system_clock


class RouteRequestRecord(BaseModel):
    """One planning call and its outcome."""

    request_id: str
    user_id: str
    query: str
    timestamp: datetime
    success: bool
    duration_ms: float = 0.0
    route_name: Optional[str] = None
    error: Optional[str] = None


class UsageStats(BaseModel):
    """Per-user aggregates."""

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    success_rate: float = 0.0
    avg_duration_ms: float = 0.0
    total_routes_planned: int = 0


class GlobalStats(BaseModel):
    """Aggregates across all users."""

    total_requests: int = 0
    total_users: int = 0
    overall_success_rate: float = 0.0
    avg_duration_ms: float = 0.0
    requests_last_24h: int = 0


class RequestHistory:
    """Thread-safe record of planning calls, keyed by user."""

    def __init__(self, clock: Clock = system_clock):
        self.clock = clock
        self._records: List[RouteRequestRecord] = []
        self._lock = threading.Lock()

    def record(
        self,
        request_id: str,
        user_id: str,
        query: str,
        success: bool,
        duration_ms: float,
        route_name: Optional[str] = None,
        error: Optional[str] = None,
    ) -> RouteRequestRecord:
        entry = RouteRequestRecord(
            request_id=request_id,
            user_id=user_id,
            query=query,
            timestamp=self.clock(),
            success=success,
            duration_ms=duration_ms,
            route_name=route_name,
            error=error,
        )
        with self._lock:
            self._records.append(entry)
        return entry

    def _for_user(self, user_id: str) -> List[RouteRequestRecord]:
        with self._lock:
            return [r for r in self._records if r.user_id == user_id]

    def history(self, user_id: str, limit: int = 50) -> List[RouteRequestRecord]:
        """Most recent requests first."""
        records = sorted(self._for_user(user_id), key=lambda r: r.timestamp, reverse=True)
        return records[:limit]

    def usage_stats(self, user_id: str) -> UsageStats:
        records = self._for_user(user_id)
        if not records:
            return UsageStats()

        successful = sum(1 for r in records if r.success)
        return UsageStats(
            total_requests=len(records),
            successful_requests=successful,
            failed_requests=len(records) - successful,
            success_rate=successful / len(records),
            avg_duration_ms=sum(r.duration_ms for r in records) / len(records),
            total_routes_planned=successful,
        )

    def recent_request_count(self, user_id: str, window_minutes: int = 60) -> int:
        """Requests made by a user within the last `window_minutes`, for rate limiting."""
        cutoff = self.clock() - timedelta(minutes=window_minutes)
        return sum(1 for r in self._for_user(user_id) if r.timestamp >= cutoff)

    def global_stats(self) -> GlobalStats:
        with self._lock:
            records = list(self._records)
        if not records:
            return GlobalStats()

        cutoff = self.clock() - timedelta(hours=24)
        successful = sum(1 for r in records if r.success)
        return GlobalStats(
            total_requests=len(records),
            total_users=len({r.user_id for r in records}),
            overall_success_rate=successful / len(records),
            avg_duration_ms=sum(r.duration_ms for r in records) / len(records),
            requests_last_24h=sum(1 for r in records if r.timestamp >= cutoff),
        )

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
