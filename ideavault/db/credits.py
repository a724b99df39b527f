"""User credit balances."""

from datetime import datetime, timezone
from typing import Any

from ideavault.core.logging import get_logger
from ideavault.db.supabase_client import get_user_supabase, is_no_rows, is_table_missing

logger = get_logger(__name__)

TABLE = "user_credits"

DEFAULT_CREDITS = 100
DEFAULT_PREMIUM_CREDITS = 10
INITIAL_TOTAL_CREDITS = 10


def default_credits(user_id: str) -> dict[str, Any]:
    """Balance reported when the credits table does not exist."""
    now = datetime.now(timezone.utc).isoformat()
    return {
        "user_id": user_id,
        "credits": DEFAULT_CREDITS,
        "premium_credits": DEFAULT_PREMIUM_CREDITS,
        "created_at": now,
        "updated_at": now,
    }


def create_user_credits(user_id: str) -> dict[str, Any]:
    try:
        response = (
            get_user_supabase()
            .table(TABLE)
            .insert({"user_id": user_id, "total_credits": INITIAL_TOTAL_CREDITS, "used_credits": 0})
            .execute()
        )
    except Exception as e:
        if is_table_missing(e):
            logger.warning("user_credits table not found, returning default credits")
            return default_credits(user_id)
        raise

    if not response.data:
        raise ValueError("Failed to create credits")
    return response.data[0]


def get_user_credits(user_id: str) -> dict[str, Any]:
    """
    Get the user's credits, creating the row on first access.

    Returns:
        Credits row, or the default balance when the table does not exist
    """
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
        if is_table_missing(e):
            logger.warning("user_credits table not found, returning default credits")
            return default_credits(user_id)
        if not is_no_rows(e):
            raise
        response = None

    if response is None or not response.data:
        return create_user_credits(user_id)
    return response.data


def update_user_credits(user_id: str, used_credits: float) -> dict[str, Any] | None:
    response = (
        get_user_supabase()
        .table(TABLE)
        .update(
            {
                "used_credits": used_credits,
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .eq("user_id", user_id)
        .execute()
    )
    return response.data[0] if response.data else None
