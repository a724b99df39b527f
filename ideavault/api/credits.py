"""API endpoints for user credits."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import CreditsUpdate
from ideavault.db import credits as credits_db

logger = get_logger(__name__)

router = APIRouter(prefix="/credits")


@router.get("")
async def get_credits(auth: AuthContext = Depends(require_user)) -> dict[str, Any]:
    try:
        credits = credits_db.get_user_credits(auth.user_id)
    except Exception as e:
        logger.error(f"Error fetching credits: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch credits") from e
    return {"success": True, "credits": credits}


@router.post("")
async def update_credits(
    body: CreditsUpdate,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Record the number of credits used."""
    used = body.used_credits
    if isinstance(used, bool) or not isinstance(used, (int, float)) or used < 0:
        raise HTTPException(status_code=400, detail="Invalid credits amount")

    try:
        credits = credits_db.update_user_credits(auth.user_id, used)
    except Exception as e:
        logger.error(f"Error updating credits: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update credits") from e
    return {"success": True, "credits": credits}
