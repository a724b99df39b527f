"""Idea generation pipeline.

Search the ideas store, rank the matches against the request, let Gemini
synthesize a few new ideas from the best matches, then pad with template
ideas so the caller always gets exactly ``count`` results.
"""

import math
from datetime import datetime, timezone
from typing import Any

from ideavault.chains.synthesize_ideas import synthesize_ideas
from ideavault.core.config import get_settings
from ideavault.core.idea_ranking import (
    apply_user_preferences,
    build_search_query,
    enhance_with_prompt_context,
    generate_fallback_ideas,
    generate_fallback_ideas_from_prompt,
    remove_duplicates,
)
from ideavault.core.logging import get_logger
from ideavault.db.idea_search import get_random_ideas, search_by_category, search_similar_ideas
from ideavault.db.user_ideas import generate_idea_id, save_user_idea

logger = get_logger(__name__)

REQUIRED_STRUCTURED_FIELDS = ("category", "difficulty", "targetAudience")
MAX_SYNTHESIZED = 3
CONTEXT_IDEAS = 5
SINGLE_SEARCH_LIMIT = 10


class IdeaRequestError(ValueError):
    """Invalid generation request; the message is safe to show to the user."""


def validate_request(
    request_type: str | None,
    data: dict[str, Any] | None,
    prompt: str | None,
    multiple: bool,
    count: int,
) -> None:
    """
    Check a generation request before any external call is made.

    Raises:
        IdeaRequestError: With the user-facing reason
    """
    max_count = get_settings().MAX_IDEAS_PER_REQUEST
    if multiple and (count < 1 or count > max_count):
        raise IdeaRequestError(
            f"Count must be between 1 and {max_count} for multiple generation"
        )

    if request_type == "structured":
        data = data or {}
        if not all(data.get(f) for f in REQUIRED_STRUCTURED_FIELDS):
            raise IdeaRequestError("Missing required fields: category, difficulty, targetAudience")
    elif request_type == "freeform":
        if not prompt or not prompt.strip():
            raise IdeaRequestError("Prompt is required for freeform generation")
    else:
        raise IdeaRequestError('Invalid type. Must be "structured" or "freeform"')


def synthesized_count(multiple: bool, count: int) -> int:
    """Half the requested ideas (rounded up, at most three) come from Gemini."""
    if not multiple:
        return 1
    return min(math.ceil(count / 2), MAX_SYNTHESIZED)


async def _retrieve_structured(data: dict[str, Any], query: str, limit: int, count: int):
    threshold = get_settings().STRUCTURED_SIMILARITY_THRESHOLD
    ideas = await search_similar_ideas(query, limit, threshold)

    if len(ideas) < count:
        logger.info(f"Only {len(ideas)} vector matches, adding category matches")
        ideas = ideas + search_by_category(data["category"], count)

    if len(ideas) < count:
        logger.info(f"Only {len(ideas)} matches after category search, adding random ideas")
        ideas = ideas + get_random_ideas(count)

    ideas = remove_duplicates(ideas)
    return apply_user_preferences(ideas, data)


async def _retrieve_freeform(prompt: str, query: str, limit: int, count: int):
    threshold = get_settings().FREEFORM_SIMILARITY_THRESHOLD
    ideas = await search_similar_ideas(query, limit, threshold)

    if len(ideas) < count:
        logger.info(f"Only {len(ideas)} vector matches, adding random ideas")
        ideas = ideas + get_random_ideas(count)

    ideas = remove_duplicates(ideas)
    return enhance_with_prompt_context(ideas, prompt)


def persist_ideas(user_id: str, ideas: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Stamp ownership on each idea and save it to the user's ideas.

    A failed save is logged and the idea is returned unsaved with its
    generated id; a successful save takes the stored row's id.
    """
    now = datetime.now(timezone.utc).isoformat()
    stamped = []
    for idea in ideas:
        idea = {
            **idea,
            "id": idea.get("id") or generate_idea_id(),
            "user_id": user_id,
            "created_at": idea.get("created_at") or now,
            "status": "saved",
        }
        try:
            stored = save_user_idea(
                user_id,
                {
                    **idea,
                    "is_generated": True,
                    "source_data": {
                        "source": idea.get("source"),
                        "similarity": idea.get("similarity"),
                        "original_id": idea.get("id"),
                    },
                },
            )
            if stored.get("id") is not None:
                idea["id"] = stored["id"]
        except Exception as e:
            logger.warning(f"Failed to persist generated idea '{idea.get('title')}': {e}")
        stamped.append(idea)
    return stamped


async def generate_ideas(
    user_id: str,
    request_type: str,
    data: dict[str, Any] | None = None,
    prompt: str | None = None,
    multiple: bool = False,
    count: int = 1,
) -> dict[str, Any]:
    """
    Run the generation pipeline for one request.

    Args:
        user_id: Owner of the generated ideas
        request_type: "structured" or "freeform"
        data: Structured form fields
        prompt: Freeform prompt
        multiple: Whether the caller wants a list
        count: Number of ideas wanted when ``multiple``

    Returns:
        Dict with ``ideas`` (exactly the wanted number), ``total`` candidates,
        ``ai_generated`` and ``database_matched`` counts

    Raises:
        IdeaRequestError: If the request is invalid
    """
    validate_request(request_type, data, prompt, multiple, count)
    wanted = count if multiple else 1
    search_limit = count * 2 if multiple else SINGLE_SEARCH_LIMIT
    data = data or {}

    query = build_search_query(request_type, data, prompt)
    if request_type == "structured":
        ranked = await _retrieve_structured(data, query, search_limit, wanted)
        synthesis_input = query
    else:
        prompt = prompt.strip()
        ranked = await _retrieve_freeform(prompt, query, search_limit, wanted)
        synthesis_input = prompt

    synthesized = await synthesize_ideas(
        ranked[:CONTEXT_IDEAS], synthesis_input, synthesized_count(multiple, count)
    )

    merged = remove_duplicates(synthesized + ranked)
    if len(merged) < wanted:
        logger.info(f"Padding {wanted - len(merged)} ideas from templates")
        if request_type == "structured":
            merged += generate_fallback_ideas(data, wanted - len(merged), merged)
        else:
            merged += generate_fallback_ideas_from_prompt(prompt, wanted - len(merged), merged)

    ideas = persist_ideas(user_id, merged[:wanted])
    return {
        "ideas": ideas,
        "total": len(merged),
        "ai_generated": len(synthesized),
        "database_matched": len(ranked),
    }
