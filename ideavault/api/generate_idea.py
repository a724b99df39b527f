"""API endpoint for idea generation."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from ideavault.core.auth import AuthContext, require_user
from ideavault.core.config import get_settings
from ideavault.core.logging import get_logger
from ideavault.core.schemas_ideas import GenerateIdeaRequest
from ideavault.services.idea_generation import IdeaRequestError, generate_ideas

logger = get_logger(__name__)

router = APIRouter()


@router.post("/generate-idea")
async def generate_idea(
    body: GenerateIdeaRequest,
    auth: AuthContext = Depends(require_user),
) -> dict[str, Any]:
    """
    Generate business ideas from a structured form or a freeform prompt.

    Returns:
        The single best idea, or ``{ideas, total, source, ...}`` when
        ``multiple`` is set
    """
    data = body.data.model_dump(exclude_none=True) if body.data else {}
    try:
        result = await generate_ideas(
            auth.user_id,
            body.type,
            data=data,
            prompt=body.prompt,
            multiple=body.multiple,
            count=body.count,
        )
    except IdeaRequestError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error generating ideas: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to generate idea. Please try again.") from e

    if not body.multiple:
        return result["ideas"][0]

    response = {
        "ideas": result["ideas"],
        "total": result["total"],
        "source": "hybrid_vector_gemini",
        "ai_generated": result["ai_generated"],
        "database_matched": result["database_matched"],
        "model": get_settings().GEMINI_MODEL,
    }
    if body.type == "freeform":
        response["prompt"] = body.prompt
    return response
