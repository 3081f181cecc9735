"""
Shared infrastructure for the route planner.

Modules:
- llm: OpenAI client for the planning oracle, with retry logic
- maps: Google Maps places and directions client
- logging: Structured JSON logging
- contracts: Request and route contracts
- errors: Route planning error taxonomy
- clock: Injectable wall clock
"""

from hikeplanner.shared.llm.client import get_cached_client, call_llm
from hikeplanner.shared.logging.config import setup_logging, log_state_transition

__all__ = [
    "get_cached_client",
    "call_llm",
    "setup_logging",
    "log_state_transition",
]
