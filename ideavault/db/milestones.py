"""CRUD operations for milestones."""

from datetime import datetime, timezone
from typing import Any

from ideavault.db.supabase_client import get_user_supabase

TABLE = "milestones"


def list_milestones(
    user_id: str,
    status: str | None = None,
    idea_id: str | None = None,
) -> list[dict[str, Any]]:
    """
    List a user's milestones, newest first.

    Args:
        user_id: Clerk user id
        status: Filter by status
        idea_id: Filter by linked idea

    Returns:
        Milestone dicts with the linked idea's title and category embedded
    """
    query = (
        get_user_supabase()
        .table(TABLE)
        .select("*, user_ideas(title, category)")
        .eq("user_id", user_id)
    )
    if status:
        query = query.eq("status", status)
    if idea_id:
        query = query.eq("idea_id", idea_id)

    response = query.order("created_at", desc=True).execute()
    return response.data or []


def create_milestone(user_id: str, milestone: dict[str, Any]) -> dict[str, Any]:
    data = {
        **milestone,
        "user_id": user_id,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    response = get_user_supabase().table(TABLE).insert(data).execute()
    if not response.data:
        raise ValueError("Failed to create milestone")
    return response.data[0]


def update_milestone(
    user_id: str, milestone_id: str, updates: dict[str, Any]
) -> dict[str, Any] | None:
    """Apply a partial update; None when no row matched."""
    payload = {**updates, "updated_at": datetime.now(timezone.utc).isoformat()}
    response = (
        get_user_supabase()
        .table(TABLE)
        .update(payload)
        .eq("id", milestone_id)
        .eq("user_id", user_id)
        .execute()
    )
    return response.data[0] if response.data else None


def delete_milestone(user_id: str, milestone_id: str) -> bool:
    response = (
        get_user_supabase()
        .table(TABLE)
        .delete()
        .eq("id", milestone_id)
        .eq("user_id", user_id)
        .execute()
    )
    return bool(response.data)
