"""API endpoints for saved ideas, their reports and the public idea catalogue."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query

from ideavault.api.dependencies import require_user_store
from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.core.report_fallback import REPORT_SECTIONS
from ideavault.core.schemas_ideas import IdeaUpdateRequest, SaveIdeaRequest
from ideavault.db import idea_reports as reports_db
from ideavault.db import idea_search
from ideavault.db import user_ideas as ideas_db

logger = get_logger(__name__)

router = APIRouter()

EXPLORE_MAX_LIMIT = 50


@router.post("/save-idea")
async def save_idea(
    body: SaveIdeaRequest,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Save an idea to the user's collection."""
    if not body.title or not body.description:
        raise HTTPException(status_code=400, detail="Missing required fields: title and description")

    try:
        idea = ideas_db.save_user_idea(
            auth.user_id,
            {
                "title": body.title,
                "description": body.description,
                "category": body.category or "Other",
                "difficulty": body.difficulty or "medium",
                "target_audience": body.target_audience or "General",
                "tags": body.tags,
                "is_generated": body.generated,
                "source_data": body.source_data,
                "status": "saved",
            },
        )
    except Exception as e:
        logger.error(f"Save idea API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {"success": True, "idea": idea}


@router.get("/ideas")
async def list_ideas(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    auth: AuthContext = Depends(require_user),
    _store: None = Depends(require_user_store),
) -> dict[str, Any]:
    try:
        ideas = ideas_db.list_user_ideas(auth.user_id, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"Error listing ideas: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e
    return {"success": True, "ideas": ideas, "total": len(ideas)}


# Declared before /ideas/{idea_id} so "explore" is not taken for an id
@router.get("/ideas/explore")
async def explore_ideas(
    q: str | None = Query(None, description="Search text"),
    category: str | None = Query(None, description="Category filter"),
    limit: int = Query(12, description="Page size (1-50)"),
) -> dict[str, Any]:
    """
    Browse the ideas store.

    A query goes through the vector/keyword search cascade, a category alone
    through the category search, and with neither a random sample is shown.
    """
    if limit < 1 or limit > EXPLORE_MAX_LIMIT:
        raise HTTPException(status_code=400, detail="Invalid pagination parameters")

    try:
        if q and q.strip():
            ideas = await idea_search.search_similar_ideas(q.strip(), limit)
            if category and category != "All Categories":
                wanted = category.lower()
                ideas = [
                    i for i in ideas
                    if wanted in i["category"].lower() or any(wanted in t.lower() for t in i["tags"])
                ]
        elif category and category != "All Categories":
            ideas = idea_search.search_by_category(category, limit)
        else:
            ideas = idea_search.get_random_ideas(limit)
    except Exception as e:
        logger.error(f"Explore ideas API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch ideas from database") from e

    return {"ideas": ideas, "total": len(ideas)}


@router.get("/ideas/{idea_id}")
async def get_idea(
    idea_id: str = Path(..., description="Saved idea id"),
    auth: AuthContext = Depends(require_user),
    _store: None = Depends(require_user_store),
) -> dict[str, Any]:
    try:
        idea = ideas_db.get_user_idea(auth.user_id, idea_id)
    except Exception as e:
        logger.error(f"Get idea API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if not idea:
        raise HTTPException(status_code=404, detail="Idea not found")
    return {"success": True, "idea": idea}


@router.patch("/ideas/{idea_id}")
async def update_idea(
    body: IdeaUpdateRequest,
    idea_id: str = Path(..., description="Saved idea id"),
    auth: AuthContext = Depends(require_user),
    _store: None = Depends(require_user_store),
) -> dict[str, Any]:
    """Update status or editable fields of a saved idea."""
    updates = body.model_dump(exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="At least one field must be provided")

    try:
        idea = ideas_db.update_user_idea(auth.user_id, idea_id, updates)
    except Exception as e:
        logger.error(f"Update idea API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if not idea:
        raise HTTPException(status_code=404, detail="Idea not found")
    return {"success": True, "idea": idea}


@router.delete("/ideas/{idea_id}")
async def delete_idea(
    idea_id: str = Path(..., description="Saved idea id"),
    auth: AuthContext = Depends(require_user),
    _store: None = Depends(require_user_store),
) -> dict[str, Any]:
    try:
        deleted = ideas_db.delete_user_idea(auth.user_id, idea_id)
    except Exception as e:
        logger.error(f"Delete idea API error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    if not deleted:
        raise HTTPException(status_code=404, detail="Idea not found")
    return {"success": True, "message": "Idea deleted successfully"}


@router.get("/ideas/{idea_id}/report")
async def get_report(
    idea_id: str = Path(..., description="Saved idea id"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Stored report of a saved idea; ``report`` is null when none exists."""
    try:
        idea = ideas_db.get_user_idea(auth.user_id, idea_id)
        if not idea:
            raise HTTPException(status_code=404, detail="Idea not found")
        report = reports_db.get_idea_report(auth.user_id, idea_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching idea report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch idea report") from e

    return {"success": True, "report": report}


@router.post("/ideas/{idea_id}/report")
async def create_report(
    idea_id: str = Path(..., description="Saved idea id"),
    body: dict[str, Any] | None = Body(None),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Store a report for a saved idea; 409 when one already exists."""
    body = body or {}
    try:
        idea = ideas_db.get_user_idea(auth.user_id, idea_id)
        if not idea:
            raise HTTPException(status_code=404, detail="Idea not found")

        if reports_db.get_idea_report(auth.user_id, idea_id):
            raise HTTPException(status_code=409, detail="Report already exists")

        report_data = {section: body.get(section) or {} for section in REPORT_SECTIONS}
        for extra in ("visualizations", "mvp_prompt", "model"):
            if body.get(extra):
                report_data[extra] = body[extra]
        report = reports_db.create_idea_report(auth.user_id, idea_id, report_data)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating idea report: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create idea report") from e

    return {"success": True, "report": report}
