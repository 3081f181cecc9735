"""Wall clock used by routing and suggestions."""

from datetime import datetime
from typing import Callable


Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()
