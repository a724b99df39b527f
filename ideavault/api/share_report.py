"""API endpoints for public report share links."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import ShareReportRequest
from ideavault.db import shared_reports as shared_db

logger = get_logger(__name__)

router = APIRouter(prefix="/share-report")

SHARE_TOKEN_BYTES = 32


def share_url(token: str) -> str:
    return f"{get_settings().APP_URL.rstrip('/')}/share/{token}"


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@router.post("")
async def create_share_link(
    body: ShareReportRequest,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """
    Create a share link for a report.

    The link is returned even when it cannot be stored; such responses carry
    ``fallback: true`` and the link will not resolve.
    """
    if not body.idea_id or not body.report_data or not body.idea_data:
        raise HTTPException(
            status_code=400, detail="Missing required fields: ideaId, reportData, ideaData"
        )

    token = secrets.token_hex(SHARE_TOKEN_BYTES)
    expiry_days = body.expiry_days or get_settings().SHARE_LINK_DEFAULT_EXPIRY_DAYS
    expires_at = datetime.now(timezone.utc) + timedelta(days=expiry_days)
    response = {
        "success": True,
        "shareUrl": share_url(token),
        "shareToken": token,
        "expiresAt": expires_at.isoformat(),
    }

    try:
        stored = shared_db.create_shared_report(
            auth.user_id, token, str(body.idea_id), body.idea_data, body.report_data, expires_at
        )
    except Exception as e:
        logger.warning(f"Failed to store share link, returning unpersisted link: {e}")
        return {
            **response,
            "fallback": True,
            "message": "Share link created (temporary - not persisted)",
        }

    return {**response, "reportId": stored.get("id")}


@router.get("")
async def get_shared_report(
    token: str | None = Query(None, description="Share token"),
) -> dict[str, Any]:
    """Resolve a share link. No authentication; every read counts as a view."""
    if not token:
        raise HTTPException(status_code=400, detail="Missing share token")

    try:
        shared = shared_db.get_active_shared_report(token)
    except Exception as e:
        logger.warning(f"Share link lookup failed: {e}")
        raise HTTPException(
            status_code=404, detail="Share link not found or database unavailable"
        ) from e

    if not shared:
        raise HTTPException(status_code=404, detail="Share link not found or expired")

    if datetime.now(timezone.utc) > _parse_timestamp(shared["expires_at"]):
        raise HTTPException(status_code=410, detail="Share link has expired")

    view_count = (shared.get("view_count") or 0) + 1
    try:
        shared_db.record_view(shared["id"], view_count)
    except Exception as e:
        logger.warning(f"Failed to record share link view: {e}")

    return {
        "success": True,
        "ideaData": shared.get("idea_data"),
        "reportData": shared.get("report_data"),
        "createdAt": shared.get("created_at"),
        "expiresAt": shared.get("expires_at"),
        "viewCount": view_count,
    }


@router.delete("")
async def deactivate_share_link(
    token: str | None = Query(None, description="Share token"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    if not token:
        raise HTTPException(status_code=400, detail="Missing share token")

    try:
        shared_db.deactivate_shared_report(auth.user_id, token)
    except Exception as e:
        logger.error(f"Failed to deactivate share link: {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Database unavailable") from e

    return {"success": True, "message": "Share link deactivated"}
