"""API endpoints for business report generation."""

from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.logging import get_logger
from ideavault.services.report_generation import ReportInProgressError, generate_report

logger = get_logger(__name__)

router = APIRouter()

ERROR_PREFIX = "Failed to generate business report: "


class GenerateReportRequest(BaseModel):
    """Body of POST /api/generate-report."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    idea: Optional[dict[str, Any]] = None
    idea_id: Optional[int | str] = Field(None, alias="ideaId")


def map_report_error(error: Exception) -> HTTPException:
    """Translate a generation failure into the user-facing HTTP error."""
    message = str(error)
    lowered = message.lower()

    if "api key" in lowered:
        return HTTPException(
            status_code=503, detail="AI service configuration error. Please contact support."
        )
    if "quota" in lowered or "rate limit" in lowered or "429" in lowered:
        return HTTPException(
            status_code=429, detail="AI service temporarily unavailable. Please try again later."
        )
    if "timeout" in lowered or "timed out" in lowered:
        return HTTPException(
            status_code=408, detail="Report generation timed out. Please try again."
        )

    if not message.startswith(ERROR_PREFIX):
        message = f"{ERROR_PREFIX}{message}"
    return HTTPException(status_code=500, detail=message)


@router.post("/generate-report")
async def create_report(
    body: GenerateReportRequest,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """
    Generate the six-section business report for an idea.

    At most one generation runs per user and idea; a second request while
    the first is in flight gets 429.
    """
    idea = body.idea
    if not idea or not idea.get("title") or not idea.get("description"):
        raise HTTPException(
            status_code=400, detail="Missing required fields: idea with title and description"
        )

    try:
        return await generate_report(auth.user_id, idea, body.idea_id)
    except ReportInProgressError as e:
        raise HTTPException(status_code=429, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Generate report API error: {e}", exc_info=True)
        raise map_report_error(e) from e


@router.get("/generate-report")
async def report_info(
    idea_id: str | None = Query(None, description="Idea id"),
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """Reports are not looked up here; clients POST to generate one."""
    if not idea_id:
        raise HTTPException(status_code=400, detail="Missing idea_id parameter")
    return {
        "message": "Reports are generated on-demand. Use POST endpoint to generate a new report.",
        "idea_id": idea_id,
    }
