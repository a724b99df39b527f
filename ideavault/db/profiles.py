"""User profile storage."""

from datetime import datetime, timezone
from typing import Any

from ideavault.db.supabase_client import get_user_supabase, is_no_rows

TABLE = "user_profiles"


def get_user_profile(user_id: str) -> dict[str, Any] | None:
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


def upsert_user_profile(user_id: str, profile: dict[str, Any]) -> dict[str, Any]:
    """Create or update the profile row for ``user_id``."""
    data = {
        **profile,
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
        raise ValueError("Failed to update profile")
    return response.data[0]
