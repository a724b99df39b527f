"""Synthesize new business ideas from retrieved ideas with Gemini."""

import json
import re
import time
from datetime import datetime, timezone
from typing import Any

from ideavault.core.gemini import generate_text, is_gemini_configured
from ideavault.core.llm import parse_json_array
from ideavault.core.logging import get_logger

logger = get_logger(__name__)

MAX_CONTEXT_IDEAS = 5
SYNTHESIS_SIMILARITY = 0.95
TEXT_PARSE_SIMILARITY = 0.9

IDEA_SYNTHESIS_PROMPT = """Generate {count} innovative business ideas for: "{user_input}"

Context: {idea_context}

Requirements:
- Practical, implementable ideas with clear market potential
- Unique value propositions and competitive advantages
- Consider current trends and technology
- Ideas MUST be relevant to the user's described industry/domain. Reject unrelated industries.

Format each idea as JSON object with:
- title: Business name/concept (max 60 chars)
- description: 2-3 sentence value proposition
- category: [Technology, Healthcare, Finance, Education, E-commerce, Food & Drink, Travel, Entertainment, Productivity, Social, Gaming, Sports, News, Business, Marketing, Design]
- target_audience: Specific user group
- difficulty: [easy, medium, hard]
- key_innovation: What makes it unique (1 sentence)
- tags: Array of 3-5 keywords
- market_potential: Brief market assessment

Return ONLY valid JSON array of {count} objects."""

# Lines that open a new idea in free text: "1. Foo", "Title: Foo", "Foo Bar"
_TITLE_LINE = re.compile(r"^\d+\.|(?i:title:)|^[A-Z][^.]*$")


def build_synthesis_prompt(context_ideas: list[dict[str, Any]], user_input: str, count: int) -> str:
    idea_context = "\n".join(
        f"- {idea.get('title', '')}: {idea.get('description', '')}"
        for idea in context_ideas[:MAX_CONTEXT_IDEAS]
    )
    return IDEA_SYNTHESIS_PROMPT.format(
        count=count, user_input=user_input, idea_context=idea_context
    )


def _stamp(ideas: list[dict[str, Any]], similarity: float) -> list[dict[str, Any]]:
    ts = int(time.time() * 1000)
    generated_at = datetime.now(timezone.utc).isoformat()
    return [
        {
            **idea,
            "id": f"gemini_{ts}_{index}",
            "source": "gemini_synthesis",
            "upvotes": 0,
            "similarity": similarity,
            "generated_at": generated_at,
        }
        for index, idea in enumerate(ideas)
    ]


def parse_ideas_from_text(text: str, user_input: str, count: int) -> list[dict[str, Any]]:
    """
    Recover ideas from a non-JSON response by scanning for labeled lines.

    A numbered line, a ``title:`` line or a bare capitalised line without a
    period starts a new idea; ``description:``, ``category:``, ``target audience:``
    and ``difficulty:`` lines fill the current one.
    """
    parsed: list[dict[str, str]] = []
    current: dict[str, str] = {}

    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        lower = stripped.lower()

        if "description:" in lower:
            current["description"] = re.sub(r"description:", "", stripped, flags=re.I).strip()
        elif "category:" in lower:
            current["category"] = re.sub(r"category:", "", stripped, flags=re.I).strip()
        elif "target" in lower and "audience" in lower and ":" in lower:
            current["target_audience"] = re.sub(
                r"target audience:", "", stripped, flags=re.I
            ).strip()
        elif "difficulty:" in lower:
            current["difficulty"] = re.sub(r"difficulty:", "", stripped, flags=re.I).strip()
        elif _TITLE_LINE.search(stripped):
            if current.get("title"):
                parsed.append(current)
                current = {}
            title = re.sub(r"^\d+\.", "", stripped)
            current["title"] = re.sub(r"title:", "", title, flags=re.I).strip(" *#")

    if current.get("title"):
        parsed.append(current)

    ideas = []
    for index, idea in enumerate(parsed[:count]):
        category = idea.get("category") or "Technology"
        ideas.append(
            {
                "title": idea.get("title") or f"AI-Generated Idea {index + 1}",
                "description": idea.get("description")
                or f"Innovative solution based on: {user_input}",
                "category": category,
                "target_audience": idea.get("target_audience") or "General",
                "difficulty": (idea.get("difficulty") or "medium").lower(),
                "tags": [category, "AI-Generated", "Innovation"],
                "key_innovation": "AI-generated innovative approach",
                "market_potential": "Significant market opportunity",
            }
        )
    return _stamp(ideas, TEXT_PARSE_SIMILARITY)


async def synthesize_ideas(
    context_ideas: list[dict[str, Any]],
    user_input: str,
    count: int = 2,
) -> list[dict[str, Any]]:
    """
    Ask Gemini for ``count`` new ideas grounded in retrieved ideas.

    Never raises: an unconfigured key, exhausted retries or an unusable
    response all yield an empty list so the caller can pad with templates.

    Args:
        context_ideas: Ranked retrieved ideas; the top five become prompt context
        user_input: Search query or freeform prompt
        count: Number of ideas to request

    Returns:
        Ideas with ``source`` "gemini_synthesis"
    """
    if not is_gemini_configured():
        logger.info("Gemini API key not configured, skipping AI synthesis")
        return []

    prompt = build_synthesis_prompt(context_ideas, user_input, count)
    try:
        response = await generate_text(
            prompt, temperature=0.7, max_output_tokens=4096, label="idea_synthesis"
        )
    except Exception as e:
        logger.warning(f"Idea synthesis failed: {e}")
        return []

    if not response:
        logger.warning("Empty response from Gemini for idea synthesis")
        return []

    try:
        raw_ideas = parse_json_array(response)
    except (json.JSONDecodeError, ValueError) as e:
        logger.warning(f"Failed to parse synthesized ideas as JSON ({e}), trying text parser")
        return parse_ideas_from_text(response, user_input, count)

    ideas = [i for i in raw_ideas if isinstance(i, dict) and i.get("title")]
    for idea in ideas:
        if not isinstance(idea.get("tags"), list):
            idea["tags"] = []
        if idea.get("difficulty"):
            idea["difficulty"] = str(idea["difficulty"]).lower()
    return _stamp(ideas, SYNTHESIS_SIMILARITY)
