"""Tests for POST/GET /api/generate-report and the report service."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
from fastapi import HTTPException

from ideavault.api.generate_report import map_report_error
from ideavault.chains.generate_report import ReportGenerationError
from ideavault.core.config import get_settings
from ideavault.core.memory_store import get_report_queue
from ideavault.services.report_generation import (
    ReportInProgressError,
    compute_checksum,
    generate_report,
    queue_key,
)

SERVICE = "ideavault.services.report_generation"
USER_ID = "user_test_123"

IDEA = {
    "title": "Study Buddy",
    "description": "Peer tutoring marketplace",
    "category": "Technology",
}

REPORT = {
    "business_concept": {"elevator_pitch": "Tutoring on demand"},
    "generated_at": "2026-01-01T00:00:00+00:00",
    "model": "gemini-2.5-flash",
}


@pytest.fixture
def report_mocks():
    with patch(f"{SERVICE}.generate_idea_report", new_callable=AsyncMock, return_value=REPORT) as generate, \
            patch(f"{SERVICE}.get_user_idea", return_value=None) as get_idea, \
            patch(f"{SERVICE}.create_idea_report") as create_report:
        yield {"generate": generate, "get_idea": get_idea, "create_report": create_report}


@pytest.fixture
def content_checksum(monkeypatch):
    monkeypatch.setenv("REPORT_CHECKSUM_INCLUDE_TIMESTAMP", "false")
    get_settings.cache_clear()


def test_generates_report(client, report_mocks):
    response = client.post("/api/generate-report", json={"idea": IDEA})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["report"] == REPORT
    assert body["generated_at"] == REPORT["generated_at"]
    assert len(body["checksum"]) == 16
    assert "cached" not in body
    report_mocks["create_report"].assert_not_called()


def test_second_request_served_from_cache(client, report_mocks, content_checksum):
    first = client.post("/api/generate-report", json={"idea": IDEA})
    second = client.post("/api/generate-report", json={"idea": IDEA})

    assert first.status_code == 200
    assert second.json()["cached"] is True
    assert second.json()["checksum"] == first.json()["checksum"]
    report_mocks["generate"].assert_awaited_once()


def test_timestamp_is_part_of_checksum():
    # Only the first 12 bytes survive truncation, so use short fields
    idea = {"title": "A", "description": "B", "category": "C"}
    assert compute_checksum(idea, timestamp_ms=1) != compute_checksum(idea, timestamp_ms=2)


def test_in_flight_generation_is_429(client, report_mocks):
    get_report_queue().try_acquire(queue_key(USER_ID, 42, "unused"), "unused")

    response = client.post("/api/generate-report", json={"idea": IDEA, "ideaId": 42})

    assert response.status_code == 429
    assert response.json() == {"error": "Report generation already in progress for this idea"}
    report_mocks["generate"].assert_not_awaited()


@pytest.mark.asyncio
async def test_overlapping_generation_rejected_until_first_completes(report_mocks):
    started = asyncio.Event()
    release = asyncio.Event()

    async def slow_report(idea):
        started.set()
        await release.wait()
        return REPORT

    report_mocks["generate"].side_effect = slow_report
    key = queue_key(USER_ID, 42, "")
    first = asyncio.create_task(generate_report(USER_ID, IDEA, 42))
    await started.wait()

    assert get_report_queue().is_active(key)
    with pytest.raises(ReportInProgressError):
        await generate_report(USER_ID, IDEA, 42)

    release.set()
    assert (await first)["success"] is True
    assert not get_report_queue().is_active(key)

    third = await generate_report(USER_ID, IDEA, 42)
    assert third["success"] is True
    assert not get_report_queue().is_active(key)


def test_stored_idea_is_used_and_report_persisted(client, report_mocks):
    stored = {**IDEA, "id": 42, "title": "Study Buddy Pro"}
    report_mocks["get_idea"].return_value = stored

    response = client.post("/api/generate-report", json={"idea": IDEA, "ideaId": 42})

    assert response.status_code == 200
    assert response.json()["idea_id"] == 42
    report_mocks["get_idea"].assert_called_once_with(USER_ID, 42)
    assert report_mocks["generate"].await_args.args[0] == stored
    report_mocks["create_report"].assert_called_once_with(USER_ID, 42, REPORT)


def test_persist_failure_does_not_fail_request(client, report_mocks):
    report_mocks["get_idea"].return_value = {**IDEA, "id": 42}
    report_mocks["create_report"].side_effect = RuntimeError("insert failed")

    response = client.post("/api/generate-report", json={"idea": IDEA, "ideaId": 42})

    assert response.status_code == 200


@pytest.mark.parametrize(
    "error,status,message",
    [
        (ReportGenerationError("API key not configured or invalid"), 503,
         "AI service configuration error. Please contact support."),
        (RuntimeError("429 Too Many Requests"), 429,
         "AI service temporarily unavailable. Please try again later."),
        (TimeoutError("Request timeout after 3 attempts"), 408,
         "Report generation timed out. Please try again."),
        (ReportGenerationError("Failed to generate business report: boom"), 500,
         "Failed to generate business report: boom"),
    ],
)
def test_generation_errors_are_mapped_and_queue_released(client, report_mocks, error, status, message):
    report_mocks["generate"].side_effect = error

    response = client.post("/api/generate-report", json={"idea": IDEA, "ideaId": 7})

    assert response.status_code == status
    assert response.json() == {"error": message}
    assert not get_report_queue().is_active(queue_key(USER_ID, 7, ""))


def test_map_report_error_prefixes_plain_messages():
    error = map_report_error(ValueError("weird"))
    assert isinstance(error, HTTPException)
    assert error.detail == "Failed to generate business report: weird"


@pytest.mark.parametrize(
    "idea",
    [None, {"title": "Only title"}, {"description": "Only description"}],
)
def test_missing_title_or_description_is_400(client, report_mocks, idea):
    response = client.post("/api/generate-report", json={"idea": idea})

    assert response.status_code == 400
    report_mocks["generate"].assert_not_awaited()


def test_get_requires_idea_id(client):
    assert client.get("/api/generate-report").status_code == 400

    response = client.get("/api/generate-report", params={"idea_id": "42"})
    assert response.status_code == 200
    assert response.json()["idea_id"] == "42"


def test_compute_checksum(content_checksum):
    assert compute_checksum(IDEA) == compute_checksum(dict(IDEA))
    assert compute_checksum(IDEA) != compute_checksum({**IDEA, "title": "Other"})
    assert len(compute_checksum(IDEA)) == 16


def test_queue_key_prefers_idea_id():
    assert queue_key("u1", 42, "abc") == "u1_42"
    assert queue_key("u1", None, "abc") == "u1_abc"


def test_titles_sharing_a_prefix_share_a_checksum(content_checksum):
    tracker = {**IDEA, "title": "Smart Fitness Tracker"}
    coach = {**IDEA, "title": "Smart Fitness Coach"}
    assert compute_checksum(tracker) == compute_checksum(coach)
