"""API endpoints for client-reported system logs."""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from ideavault.core.auth import AuthContext, optional_user, require_user
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import LOG_STATUSES, SystemLogRequest
from ideavault.db import system_logs as logs_db

logger = get_logger(__name__)

router = APIRouter(prefix="/system-logs")


@router.post("")
async def record_log(
    body: SystemLogRequest,
    request: Request,
    auth: Optional[AuthContext] = Depends(optional_user),
) -> dict[str, Any]:
    """
    Record a client-side event.

    Authentication is optional. When the log cannot be stored it is written
    to the service log instead and the response says ``fallback: true``.
    """
    if not body.operation or not body.status or not body.message:
        raise HTTPException(
            status_code=400, detail="Missing required fields: operation, status, message"
        )
    if body.status not in LOG_STATUSES:
        raise HTTPException(
            status_code=400,
            detail="Invalid status. Must be one of: success, error, warning, info",
        )

    user_id = auth.user_id if auth else None
    metadata = {
        **(body.metadata or {}),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "user_agent": request.headers.get("user-agent"),
        "ip_address": request.headers.get("x-forwarded-for") or "unknown",
    }

    try:
        entry = logs_db.create_system_log(
            user_id, body.operation, body.status, body.message, body.error_details, metadata
        )
    except Exception as e:
        logger.warning(
            f"Failed to store system log ({e}); operation={body.operation} "
            f"status={body.status} message={body.message} user_id={user_id}"
        )
        return {"success": True, "message": "Log recorded (fallback mode)", "fallback": True}

    return {"success": True, "logId": entry.get("id"), "message": "Log recorded successfully"}


@router.get("")
async def list_logs(
    operation: str | None = Query(None),
    status: str | None = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    try:
        logs = logs_db.list_system_logs(operation=operation, status=status, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"Failed to retrieve logs: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to retrieve logs") from e

    return {"success": True, "logs": logs, "total": len(logs), "offset": offset, "limit": limit}
