"""
OpenAI client for the planning oracle.

Provides a cached client instance and a wrapper for chat completion calls
with automatic retries on transport failures using tenacity.
"""

import os
from typing import List, Dict, Optional

from openai import (
    OpenAI,
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from dotenv import load_dotenv

from hikeplanner.shared.errors import OracleResponseError

load_dotenv()

DEFAULT_MODEL = os.environ.get("HIKEPLANNER_MODEL", "gpt-4.1-mini")

JSON_ONLY_INSTRUCTION = (
    "You must respond with ONLY valid JSON, no markdown, no explanation."
)

ORACLE_TIMEOUT_S = float(os.environ.get("HIKEPLANNER_ORACLE_TIMEOUT", "30"))

_client: Optional[OpenAI] = None


def get_cached_client() -> OpenAI:
    """
    Process-wide OpenAI client for the planning oracle.

    Built on first use from OPENAI_API_KEY. The SDK's own retries are
    disabled; `call_llm` retries transport failures itself.
    """
    global _client
    if _client is None:
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("Missing OpenAI API key (set OPENAI_API_KEY)")
        _client = OpenAI(api_key=api_key, timeout=ORACLE_TIMEOUT_S, max_retries=0)
    return _client


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(
        (APIConnectionError, APITimeoutError, InternalServerError, RateLimitError)
    ),
    reraise=True,
)
def call_llm(
    messages: List[Dict[str, str]],
    model: str = DEFAULT_MODEL,
    client: Optional[OpenAI] = None,
    temperature: Optional[float] = None,
    json_mode: bool = False,
) -> str:
    """
    Call the OpenAI Chat Completion API with automatic retries.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        model: Model identifier to use
        client: Optional OpenAI client instance. If not provided, uses cached client.
        temperature: Sampling temperature, provider default when None
        json_mode: Request a JSON object response format

    Returns:
        The assistant's response content as a string.

    Raises:
        OracleResponseError: If the response has no choices or no content.
    """
    if client is None:
        client = get_cached_client()

    kwargs = {"model": model, "messages": messages}
    if temperature is not None:
        kwargs["temperature"] = temperature
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    response = client.chat.completions.create(**kwargs)

    if not response.choices:
        raise OracleResponseError("No response from planning oracle")

    content = response.choices[0].message.content
    if not content:
        raise OracleResponseError("Planning oracle returned empty content")

    return content.strip()


def generate_structured_response(
    prompt: str,
    system_instruction: Optional[str] = None,
    temperature: float = 0.2,
    model: str = DEFAULT_MODEL,
    client: Optional[OpenAI] = None,
) -> str:
    """
    Ask the oracle for a strictly-JSON answer.

    Parsing is left to the caller so that malformed output can be reported
    with the caller's own error type.

    Args:
        prompt: The user message content
        system_instruction: Optional system message content
        temperature: Sampling temperature (default: 0.2)
        model: Model identifier to use
        client: Optional OpenAI client instance

    Returns:
        Raw response text, expected to hold a JSON object.
    """
    messages = []
    if system_instruction:
        messages.append({"role": "system", "content": system_instruction})
    messages.append(
        {"role": "user", "content": f"{prompt}\n\n{JSON_ONLY_INSTRUCTION}"}
    )
    return call_llm(
        messages,
        model=model,
        client=client,
        temperature=temperature,
        json_mode=True,
    )
