"""Client-reported operation logs."""

from datetime import datetime, timezone
from typing import Any

from ideavault.db.supabase_client import get_user_supabase

TABLE = "system_logs"


def create_system_log(
    user_id: str | None,
    operation: str,
    status: str,
    message: str,
    error_details: Any = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    response = (
        get_user_supabase()
        .table(TABLE)
        .insert(
            {
                "user_id": user_id,
                "operation": operation,
                "status": status,
                "message": message,
                "error_details": error_details,
                "metadata": metadata or {},
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        .execute()
    )
    if not response.data:
        raise ValueError("Failed to store log")
    return response.data[0]


def list_system_logs(
    operation: str | None = None,
    status: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict[str, Any]]:
    """
    List logs, newest first.

    Args:
        operation: Filter by operation name
        status: Filter by status
        limit: Page size
        offset: Rows to skip

    Returns:
        Log dicts
    """
    query = get_user_supabase().table(TABLE).select("*")
    if operation:
        query = query.eq("operation", operation)
    if status:
        query = query.eq("status", status)

    response = query.order("created_at", desc=True).range(offset, offset + limit - 1).execute()
    return response.data or []
