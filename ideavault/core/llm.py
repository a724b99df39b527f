"""LLM call resilience and response parsing helpers."""

import asyncio
import json
import re
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from google.genai import errors as genai_errors

from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

# Transient failures worth another attempt. 4xx client errors (bad key,
# quota, safety, unknown model) are surfaced immediately.
RETRYABLE_ERRORS: tuple[type[BaseException], ...] = (
    TimeoutError,
    asyncio.TimeoutError,
    ConnectionError,
    httpx.TransportError,
    genai_errors.ServerError,
)


async def with_retry(
    call: Callable[[], Awaitable[T]],
    *,
    label: str = "llm",
    attempts: int | None = None,
    timeout: float | None = None,
    base_delay: float | None = None,
) -> T:
    """
    Run an async LLM call under a per-attempt timeout with exponential backoff.

    Args:
        call: Zero-argument coroutine factory; invoked once per attempt
        label: Name used in log lines
        attempts: Total attempts (defaults to LLM_RETRY_ATTEMPTS)
        timeout: Per-attempt timeout in seconds (defaults to LLM_REQUEST_TIMEOUT_SECONDS)
        base_delay: First backoff delay, doubled after each failure

    Returns:
        Result of the first successful attempt

    Raises:
        TimeoutError: If the last attempt timed out
        Exception: The last transient error, or any non-retryable error as-is
    """
    settings = get_settings()
    attempts = attempts or settings.LLM_RETRY_ATTEMPTS
    timeout = timeout if timeout is not None else settings.LLM_REQUEST_TIMEOUT_SECONDS
    base_delay = base_delay if base_delay is not None else settings.LLM_RETRY_BASE_DELAY_SECONDS

    for attempt in range(attempts):
        try:
            return await asyncio.wait_for(call(), timeout=timeout)
        except RETRYABLE_ERRORS as e:
            if attempt == attempts - 1:
                if isinstance(e, (TimeoutError, asyncio.TimeoutError)):
                    raise TimeoutError(f"Request timeout after {attempts} attempts") from e
                raise
            delay = base_delay * (2**attempt)
            logger.warning(
                f"{label} attempt {attempt + 1}/{attempts} failed "
                f"({type(e).__name__}), retrying in {delay}s"
            )
            await asyncio.sleep(delay)

    raise RuntimeError("with_retry called with zero attempts")


def strip_llm_fences(raw_output: str) -> str:
    """Strip markdown code fences from LLM output.

    Handles: ```json ... ```, ``` ... ```, leading/trailing whitespace.
    """
    cleaned = raw_output.strip()

    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)```", cleaned, re.DOTALL)
    if fence_match:
        return fence_match.group(1).strip()

    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def parse_json_array(raw_output: str) -> list[Any]:
    """
    Extract and parse the outermost JSON array in an LLM response.

    Raises:
        json.JSONDecodeError: If no parseable array is present
        ValueError: If the parsed value is not a list
    """
    cleaned = strip_llm_fences(raw_output)
    match = re.search(r"\[[\s\S]*\]", cleaned)
    parsed = json.loads(match.group(0) if match else cleaned)
    if not isinstance(parsed, list):
        raise ValueError("Expected a JSON array")
    return parsed


def parse_json_object(raw_output: str) -> dict[str, Any]:
    """
    Extract and parse the outermost JSON object in an LLM response.

    Raises:
        json.JSONDecodeError: If no parseable object is present
        ValueError: If the parsed value is not an object
    """
    cleaned = strip_llm_fences(raw_output)
    match = re.search(r"\{[\s\S]*\}", cleaned)
    parsed = json.loads(match.group(0) if match else cleaned)
    if not isinstance(parsed, dict):
        raise ValueError("Expected a JSON object")
    return parsed
