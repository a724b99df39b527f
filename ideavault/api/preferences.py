"""API endpoints for user preferences."""

import math
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import EXPERIENCE_LEVELS, TIME_COMMITMENTS, PreferencesRequest
from ideavault.db import preferences as preferences_db

logger = get_logger(__name__)

router = APIRouter(prefix="/preferences")


def _parse_capital(value: Any) -> float | None:
    """Non-negative amount, or None when not given. Raises ValueError otherwise."""
    if value in (None, "", 0):
        return None
    if isinstance(value, bool):
        raise ValueError("Invalid capital amount")
    amount = float(value)
    if amount < 0 or math.isnan(amount):
        raise ValueError("Invalid capital amount")
    return amount


def build_preferences(body: PreferencesRequest) -> dict[str, Any]:
    """
    Validate a preferences body and fill in defaults.

    Raises:
        HTTPException: 400 for an unknown enumeration value or a bad amount
    """
    if body.experience_level and body.experience_level not in EXPERIENCE_LEVELS:
        raise HTTPException(status_code=400, detail="Invalid experience level")
    if body.time_commitment and body.time_commitment not in TIME_COMMITMENTS:
        raise HTTPException(status_code=400, detail="Invalid time commitment")
    try:
        capital = _parse_capital(body.capital_available)
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail="Invalid capital amount") from e

    return {
        "interests": (body.interests or "").strip() or None,
        "experience_level": body.experience_level or "Beginner",
        "time_commitment": body.time_commitment or "Part-time",
        "capital_available": capital,
        "preferred_ai_role": body.preferred_ai_role or "advisor",
        "target_audience": body.target_audience if isinstance(body.target_audience, list) else [],
    }


@router.get("")
async def get_preferences(auth: AuthContext = Depends(require_user)) -> dict[str, Any]:
    try:
        preferences = preferences_db.get_user_preferences(auth.user_id)
    except Exception as e:
        logger.error(f"Error fetching preferences: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch preferences") from e
    return {"success": True, "preferences": preferences}


@router.post("")
async def save_preferences(
    body: PreferencesRequest,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Replace the user's preferences."""
    data = build_preferences(body)
    try:
        preferences = preferences_db.upsert_user_preferences(auth.user_id, data)
    except Exception as e:
        logger.error(f"Error saving preferences: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to save preferences") from e
    return {"success": True, "preferences": preferences}
