"""CRUD operations for ideas saved by users."""

import random
from datetime import datetime, timezone
from typing import Any

from ideavault.core.logging import get_logger
from ideavault.db.supabase_client import get_user_supabase, is_no_rows, is_table_missing

logger = get_logger(__name__)

TABLE = "user_ideas"

SAVED_FIELDS = (
    "title",
    "description",
    "category",
    "difficulty",
    "target_audience",
    "tags",
    "is_generated",
    "source_data",
    "status",
)


def generate_idea_id() -> int:
    """Random numeric id for ideas that could not be persisted. Not collision checked."""
    return random.randrange(1_000_000)


def save_user_idea(user_id: str, idea: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a saved idea.

    Args:
        user_id: Clerk user id
        idea: Idea fields; unknown keys are ignored

    Returns:
        Stored row, or an unpersisted record with a random id when the table
        does not exist

    Raises:
        Exception: Any other database error
    """
    now = datetime.now(timezone.utc).isoformat()
    data = {k: idea[k] for k in SAVED_FIELDS if k in idea}
    data.setdefault("tags", [])
    data.update({"user_id": user_id, "created_at": now})

    try:
        response = get_user_supabase().table(TABLE).insert(data).execute()
    except Exception as e:
        if is_table_missing(e):
            logger.warning("user_ideas table not found, returning unsaved idea")
            return {**data, "id": generate_idea_id(), "updated_at": now}
        raise

    if not response.data:
        raise ValueError("Failed to save idea")
    return response.data[0]


def list_user_ideas(user_id: str, limit: int = 50, offset: int = 0) -> list[dict[str, Any]]:
    """List a user's ideas, newest first."""
    response = (
        get_user_supabase()
        .table(TABLE)
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .range(offset, offset + limit - 1)
        .execute()
    )
    return response.data or []


def get_user_idea(user_id: str, idea_id: int | str) -> dict[str, Any] | None:
    """
    Get one of the user's ideas.

    Returns:
        Idea dict, or None if it does not exist, belongs to someone else or the
        table is missing
    """
    try:
        response = (
            get_user_supabase()
            .table(TABLE)
            .select("*")
            .eq("id", str(idea_id))
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        if is_no_rows(e):
            return None
        if is_table_missing(e):
            logger.warning("user_ideas table not found")
            return None
        raise

    return response.data if response else None


def update_user_idea(
    user_id: str, idea_id: int | str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    """Apply a partial update; None when no row matched."""
    payload = {**updates, "updated_at": datetime.now(timezone.utc).isoformat()}
    response = (
        get_user_supabase()
        .table(TABLE)
        .update(payload)
        .eq("id", str(idea_id))
        .eq("user_id", user_id)
        .execute()
    )
    return response.data[0] if response.data else None


def delete_user_idea(user_id: str, idea_id: int | str) -> bool:
    """Delete an idea; True when a row was removed."""
    response = (
        get_user_supabase()
        .table(TABLE)
        .delete()
        .eq("id", str(idea_id))
        .eq("user_id", user_id)
        .execute()
    )
    return bool(response.data)
