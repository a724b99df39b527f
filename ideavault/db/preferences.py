"""User preferences: one row per user, overwritten on every save."""

from datetime import datetime, timezone
from typing import Any

from ideavault.db.supabase_client import get_user_supabase, is_no_rows

TABLE = "user_preferences"


def get_user_preferences(user_id: str) -> dict[str, Any] | None:
    try:
        response = (
            get_user_supabase()
            .table(TABLE)
            .select("*")
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        if is_no_rows(e):
            return None
        raise
    return response.data if response else None


def upsert_user_preferences(user_id: str, preferences: dict[str, Any]) -> dict[str, Any]:
    """Replace the user's preferences with ``preferences`` (no merge)."""
    data = {
        **preferences,
        "user_id": user_id,
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }
    response = (
        get_user_supabase()
        .table(TABLE)
        .upsert(data, on_conflict="user_id")
        .execute()
    )
    if not response.data:
        raise ValueError("Failed to save preferences")
    return response.data[0]
