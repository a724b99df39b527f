"""API endpoints for milestones."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.core.schemas_user import MilestoneCreate, MilestoneUpdate
from ideavault.db import milestones as milestones_db

logger = get_logger(__name__)

router = APIRouter(prefix="/milestones")

IN_PROGRESS_DEFAULT_PERCENTAGE = 25


def apply_progress_rules(updates: dict[str, Any]) -> dict[str, Any]:
    """
    Derive completion_percentage from a status change.

    ``completed`` always means 100, even when a percentage was sent.
    ``in_progress`` without a percentage starts at 25.
    """
    status = updates.get("status")
    if status == "completed":
        updates["completion_percentage"] = 100
    elif status == "in_progress" and not updates.get("completion_percentage"):
        updates["completion_percentage"] = IN_PROGRESS_DEFAULT_PERCENTAGE
    return updates


@router.get("")
async def list_milestones(
    status: str | None = Query(None, description="Filter by status"),
    idea_id: str | None = Query(None, description="Filter by linked idea"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    try:
        milestones = milestones_db.list_milestones(auth.user_id, status=status, idea_id=idea_id)
    except Exception as e:
        logger.error(f"Error fetching milestones: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch milestones") from e
    return {"success": True, "milestones": milestones}


@router.post("")
async def create_milestone(
    body: MilestoneCreate,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Create a milestone; status defaults to not_started, priority to medium."""
    if not body.title or not body.title.strip():
        raise HTTPException(status_code=400, detail="Title is required")

    data = apply_progress_rules(body.model_dump())
    data["title"] = body.title.strip()
    try:
        milestone = milestones_db.create_milestone(auth.user_id, data)
    except Exception as e:
        logger.error(f"Error creating milestone: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create milestone") from e
    return {"success": True, "milestone": milestone}


async def _update(user_id: str, milestone_id: str, body: MilestoneUpdate, error_detail: str):
    updates = apply_progress_rules(body.model_dump(exclude_unset=True))
    if not updates:
        raise HTTPException(status_code=400, detail="At least one field must be provided")

    try:
        milestone = milestones_db.update_milestone(user_id, milestone_id, updates)
    except Exception as e:
        logger.error(f"{error_detail}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=error_detail) from e

    if not milestone:
        raise HTTPException(status_code=404, detail="Milestone not found")
    return {"success": True, "milestone": milestone}


@router.put("/{milestone_id}")
async def update_milestone(
    body: MilestoneUpdate,
    milestone_id: str = Path(..., description="Milestone id"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    return await _update(auth.user_id, milestone_id, body, "Failed to update milestone")


@router.patch("/{milestone_id}")
async def update_milestone_status(
    body: MilestoneUpdate,
    milestone_id: str = Path(..., description="Milestone id"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Status change; moving to completed sets the percentage to 100."""
    return await _update(auth.user_id, milestone_id, body, "Failed to update milestone status")


@router.delete("/{milestone_id}")
async def delete_milestone(
    milestone_id: str = Path(..., description="Milestone id"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    try:
        milestones_db.delete_milestone(auth.user_id, milestone_id)
    except Exception as e:
        logger.error(f"Error deleting milestone: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete milestone") from e
    return {"success": True, "message": "Milestone deleted successfully"}
