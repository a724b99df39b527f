"""Report generation with per-idea exclusivity and a checksum-keyed cache."""

import base64
import logging
import time
from typing import Any

from ideavault.chains.generate_report import generate_idea_report
from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger, log_with_context
from ideavault.core.memory_store import get_report_cache, get_report_queue
from ideavault.db.idea_reports import create_idea_report
from ideavault.db.user_ideas import get_user_idea

logger = get_logger(__name__)

CHECKSUM_LENGTH = 16


class ReportInProgressError(Exception):
    """A report for the same user and idea is already being generated."""


def compute_checksum(idea: dict[str, Any], timestamp_ms: int | None = None) -> str:
    """
    Short identifier of an idea's content, used as the report cache key.

    With REPORT_CHECKSUM_INCLUDE_TIMESTAMP on, the request time is mixed in
    and every call yields a new key.
    """
    parts = [
        str(idea.get("title") or ""),
        str(idea.get("description") or ""),
        str(idea.get("category") or ""),
    ]
    if get_settings().REPORT_CHECKSUM_INCLUDE_TIMESTAMP:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        parts.append(str(timestamp_ms))
    raw = "_".join(parts).encode("utf-8")
    return base64.b64encode(raw).decode("ascii")[:CHECKSUM_LENGTH]


def queue_key(user_id: str, idea_id: Any, checksum: str) -> str:
    return f"{user_id}_{idea_id if idea_id else checksum}"


def _resolve_idea(user_id: str, idea_id: Any, idea: dict[str, Any]) -> dict[str, Any]:
    """Prefer the stored copy of the idea; the client payload is the fallback."""
    if not idea_id:
        return idea
    try:
        stored = get_user_idea(user_id, idea_id)
    except Exception as e:
        log_with_context(
            logger, logging.WARNING, f"Stored idea lookup failed: {e}",
            user_id=user_id, idea_id=idea_id,
        )
        return idea

    if not stored:
        return idea
    if stored.get("title") != idea.get("title"):
        log_with_context(
            logger, logging.WARNING, "Client idea does not match stored idea",
            user_id=user_id, idea_id=idea_id,
        )
    return stored


def _persist_report(user_id: str, idea_id: Any, report: dict[str, Any]) -> None:
    try:
        create_idea_report(user_id, idea_id, report)
    except Exception as e:
        log_with_context(
            logger, logging.WARNING, f"Failed to persist report: {e}",
            user_id=user_id, idea_id=idea_id,
        )


async def generate_report(
    user_id: str,
    idea: dict[str, Any],
    idea_id: Any = None,
) -> dict[str, Any]:
    """
    Generate (or serve from cache) the business report for an idea.

    Args:
        user_id: Requesting user
        idea: Client-supplied idea with at least title and description
        idea_id: Id of the user's stored idea, if any

    Returns:
        Dict with ``success``, ``report``, ``idea_id``, ``generated_at``,
        ``generation_time_ms`` and ``checksum``; cache hits add ``cached``

    Raises:
        ReportInProgressError: If a generation for this user and idea is in flight
        ReportGenerationError: If the report could not be produced
    """
    started = time.monotonic()
    idea_id = idea_id or idea.get("id")
    checksum = compute_checksum(idea)
    key = queue_key(user_id, idea_id, checksum)
    queue = get_report_queue()
    cache = get_report_cache()

    if queue.is_active(key):
        raise ReportInProgressError("Report generation already in progress for this idea")

    cached = cache.get(checksum)
    if cached is not None:
        log_with_context(logger, logging.INFO, "Serving cached report", checksum=checksum)
        return {**cached, "cached": True}

    if not queue.try_acquire(key, checksum):
        raise ReportInProgressError("Report generation already in progress for this idea")

    try:
        log_with_context(
            logger, logging.INFO, "Generating report",
            user_id=user_id, idea_id=idea_id, checksum=checksum,
        )
        source_idea = _resolve_idea(user_id, idea_id, idea)
        report = await generate_idea_report(source_idea)

        result = {
            "success": True,
            "report": report,
            "idea_id": idea_id,
            "generated_at": report.get("generated_at"),
            "generation_time_ms": int((time.monotonic() - started) * 1000),
            "checksum": checksum,
        }
        cache.put(checksum, result)

        if idea_id and source_idea is not idea:
            _persist_report(user_id, idea_id, report)
        return result
    finally:
        queue.release(key)
