"""
Logging setup for the route planner.

Two output styles are supported: the human-readable line format used by
the HTTP service, and one JSON object per record for log shippers. Graph
nodes additionally emit a structured record for every state transition.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# HTTP and SDK internals log every request at INFO
NOISY_LOGGERS = ("httpcore", "httpx", "openai", "urllib3", "googlemaps")


class StructuredFormatter(logging.Formatter):
    """
    Render a record as a single JSON line.

    Fields: time of the record (UTC), level, logger, message, plus the
    `extra` payload attached by `log_state_transition` and a formatted
    traceback when the record carries one.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: Dict[str, Any] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        payload = getattr(record, "extra", None)
        if payload:
            log_entry["extra"] = payload

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def quiet_loggers(names: Iterable[str] = NOISY_LOGGERS, level: int = logging.WARNING) -> None:
    for name in names:
        logging.getLogger(name).setLevel(level)


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    logger_name: Optional[str] = None,
    json_output: bool = False,
) -> logging.Logger:
    """
    Attach stdout (and optionally file) handlers to a logger.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to a log file, written alongside stdout
        logger_name: Logger to configure; the root logger when None
        json_output: Emit JSON lines instead of the plain line format

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    logger.handlers = []

    if json_output:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    quiet_loggers()
    return logger


def summarize_state(state: Dict[str, Any]) -> Dict[str, Any]:
    """Pick the fields worth logging out of a route planner state."""
    plan = state.get("plan")
    response = state.get("response")
    request = state.get("request")

    summary = {
        "action": getattr(plan, "action", None),
        "modify_type": getattr(plan, "modify_type", None),
        "has_current_route": getattr(request, "current_route", None) is not None,
        "route_id": None,
        "segments": None,
    }
    if response is not None:
        summary["route_id"] = response.route.route_id
        summary["segments"] = len(response.route.segments)
    return summary


def log_state_transition(
    event: str,
    state: Dict[str, Any],
    extra: Optional[Dict[str, Any]] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Emit one INFO record describing a graph transition.

    The record's `extra` attribute holds the event name, the request id and
    a summary of the plan and route in `state`; StructuredFormatter
    serializes it as-is.

    Args:
        event: Transition name (e.g., "plan_generated", "route_modified")
        state: Route planner state after the transition
        extra: Additional context to include
        logger: Logger to use; "hikeplanner.transitions" when None
    """
    if logger is None:
        logger = logging.getLogger("hikeplanner.transitions")

    payload = {
        "event": event,
        "request_id": state.get("request_id"),
        "state_summary": summarize_state(state),
    }
    if extra:
        payload["extra"] = extra

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        "",
        0,
        f"State transition: {event}",
        args=(),
        exc_info=None,
    )
    record.extra = payload
    logger.handle(record)
