"""LLM client utilities."""

from hikeplanner.shared.llm.client import (
    get_cached_client,
    call_llm,
    generate_structured_response,
)

__all__ = ["get_cached_client", "call_llm", "generate_structured_response"]
