"""Tests for the LLM retry policy and response parsing."""

import asyncio
import json
from unittest.mock import AsyncMock, patch

import pytest

from ideavault.core.llm import parse_json_array, parse_json_object, strip_llm_fences, with_retry


@pytest.mark.asyncio
async def test_with_retry_returns_first_success():
    call = AsyncMock(return_value="ok")

    assert await with_retry(call, attempts=3, timeout=1, base_delay=0) == "ok"
    assert call.await_count == 1


@pytest.mark.asyncio
async def test_with_retry_retries_transient_errors_with_backoff():
    call = AsyncMock(side_effect=[ConnectionError("reset"), ConnectionError("reset"), "ok"])

    with patch("ideavault.core.llm.asyncio.sleep", new_callable=AsyncMock) as sleep:
        result = await with_retry(call, attempts=3, timeout=1, base_delay=1.0)

    assert result == "ok"
    assert call.await_count == 3
    assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_with_retry_raises_timeout_after_last_attempt():
    async def slow():
        await asyncio.sleep(1)

    with pytest.raises(TimeoutError, match="Request timeout after 2 attempts"):
        await with_retry(slow, attempts=2, timeout=0.01, base_delay=0)


@pytest.mark.asyncio
async def test_with_retry_does_not_retry_client_errors():
    call = AsyncMock(side_effect=ValueError("API key not valid"))

    with pytest.raises(ValueError):
        await with_retry(call, attempts=3, timeout=1, base_delay=0)
    assert call.await_count == 1


def test_strip_llm_fences():
    assert strip_llm_fences('```json\n{"a": 1}\n```') == '{"a": 1}'
    assert strip_llm_fences('  {"a": 1}  ') == '{"a": 1}'


def test_parse_json_array_ignores_surrounding_text():
    raw = 'Here you go:\n[{"title": "One"}, {"title": "Two"}]\nEnjoy!'
    assert [i["title"] for i in parse_json_array(raw)] == ["One", "Two"]


def test_parse_json_object_rejects_non_json():
    with pytest.raises(json.JSONDecodeError):
        parse_json_object("no json here")


def test_parse_json_array_rejects_object():
    with pytest.raises(ValueError):
        parse_json_array('{"title": "One"}')
