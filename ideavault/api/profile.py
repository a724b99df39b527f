"""API endpoints for the user profile."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import ProfileUpdate
from ideavault.db import profiles as profiles_db

logger = get_logger(__name__)

router = APIRouter(prefix="/profile")

DEFAULT_USERNAME = "demo_user"
DEFAULT_BIO = "Passionate entrepreneur exploring innovative business ideas"
DEFAULT_NOTIFICATION_PREFERENCES = {
    "emailNotifications": True,
    "pushNotifications": False,
    "weeklyDigest": True,
    "communityUpdates": True,
}


def default_profile() -> dict[str, Any]:
    return {
        "username": DEFAULT_USERNAME,
        "bio": DEFAULT_BIO,
        "preferences": dict(DEFAULT_NOTIFICATION_PREFERENCES),
    }


@router.get("")
async def get_profile(auth: AuthContext = Depends(require_user)) -> dict[str, Any]:
    """The stored profile, or the default one for users who never saved theirs."""
    try:
        profile = profiles_db.get_user_profile(auth.user_id)
    except Exception as e:
        logger.error(f"Profile GET API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"profile": profile or default_profile()}


@router.put("")
async def update_profile(
    body: ProfileUpdate,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    if not body.username and not body.bio and not body.preferences:
        raise HTTPException(status_code=400, detail="At least one field must be provided")

    data = {
        "username": body.username or DEFAULT_USERNAME,
        "bio": body.bio or "",
        "preferences": body.preferences or dict(DEFAULT_NOTIFICATION_PREFERENCES),
    }
    try:
        profile = profiles_db.upsert_user_profile(auth.user_id, data)
    except Exception as e:
        logger.error(f"Profile PUT API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"success": True, "profile": profile}
