"""Public share links for reports."""

from datetime import datetime, timezone
from typing import Any

from ideavault.db.supabase_client import get_user_supabase, is_no_rows

TABLE = "shared_reports"


def create_shared_report(
    user_id: str,
    share_token: str,
    idea_id: str,
    idea_data: dict[str, Any],
    report_data: dict[str, Any],
    expires_at: datetime,
) -> dict[str, Any]:
    """
    Store a share link.

    Raises:
        Exception: Database errors; the caller falls back to an unpersisted link
    """
    response = (
        get_user_supabase()
        .table(TABLE)
        .insert(
            {
                "share_token": share_token,
                "user_id": user_id,
                "idea_id": idea_id,
                "idea_data": idea_data,
                "report_data": report_data,
                "expires_at": expires_at.isoformat(),
                "created_at": datetime.now(timezone.utc).isoformat(),
                "view_count": 0,
                "is_active": True,
            }
        )
        .execute()
    )
    if not response.data:
        raise ValueError("Failed to store share link")
    return response.data[0]


def get_active_shared_report(share_token: str) -> dict[str, Any] | None:
    try:
        response = (
            get_user_supabase()
            .table(TABLE)
            .select("*")
            .eq("share_token", share_token)
            .eq("is_active", True)
            .maybe_single()
            .execute()
        )
    except Exception as e:
        if is_no_rows(e):
            return None
        raise
    return response.data if response else None


def record_view(report_id: Any, view_count: int) -> None:
    """Store the new view count and last view time."""
    (
        get_user_supabase()
        .table(TABLE)
        .update(
            {
                "view_count": view_count,
                "last_viewed_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .eq("id", report_id)
        .execute()
    )


def deactivate_shared_report(user_id: str, share_token: str) -> None:
    (
        get_user_supabase()
        .table(TABLE)
        .update(
            {
                "is_active": False,
                "deactivated_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .eq("share_token", share_token)
        .eq("user_id", user_id)
        .execute()
    )
