"""Idea search over the read-only ideas database.

Search is a cascade of strategies tried in order; a tier is attempted only
when the previous one raised, never because it returned few rows:

1. ``match_startup_ideas`` similarity RPC
2. ``match_ideas`` (older deployments name the function differently),
   called with the same query embedding
3. keyword ILIKE over name / description / category tags

Callers top up short result lists themselves with ``search_by_category``
and ``get_random_ideas``. Nothing here raises: a fully failed search is an
empty list. An embedding failure skips both RPCs.
"""

import random
import re
from typing import Any, Protocol

from ideavault.core.gemini import embed_text
from ideavault.core.logging import get_logger
from ideavault.db.supabase_client import get_ideas_supabase

logger = get_logger(__name__)

IDEAS_TABLE = "product_hunt_products"

KEYWORD_SIMILARITY = 0.5
CATEGORY_SIMILARITY = 0.8
RANDOM_SIMILARITY = 0.3
MAX_TAGS = 5

CATEGORY_MAP = {
    "TECH": "Technology",
    "PRODUCTIVITY": "Productivity",
    "DESIGN": "Design",
    "MARKETING": "Marketing",
    "FINANCE": "Finance",
    "HEALTH": "Healthcare",
    "EDUCATION": "Education",
    "SOCIAL": "Social",
    "GAMING": "Gaming",
    "TRAVEL": "Travel",
    "FOOD": "Food & Drink",
    "MUSIC": "Music",
    "SPORTS": "Sports",
    "NEWS": "News",
    "BUSINESS": "Business",
}

# First matching keyword group wins
AUDIENCE_KEYWORDS = [
    (("developer", "tech", "api"), "Developers"),
    (("business", "productivity", "enterprise"), "Businesses"),
    (("design", "creative"), "Designers"),
    (("marketing", "social"), "Marketers"),
    (("student", "education"), "Students"),
]


# =============================================================================
# Row normalization
# =============================================================================


def _split_tags(category_tags: str | None) -> list[str]:
    # Comma or space separated, sometimes a JSON array string
    if not category_tags:
        return []
    return [t.strip() for t in re.split(r"[,\s\[\]\"]+", category_tags) if t.strip()]


def extract_primary_category(category_tags: str | None) -> str:
    """Map the first recognised tag to a display category."""
    tags = _split_tags(category_tags)
    for tag in tags:
        mapped = CATEGORY_MAP.get(tag.upper())
        if mapped:
            return mapped
    if tags:
        return tags[0][:1].upper() + tags[0][1:].lower()
    return "Technology"


def estimate_difficulty(upvotes: int | None) -> str:
    if not upvotes:
        return "medium"
    if upvotes > 5000:
        return "hard"
    if upvotes > 1000:
        return "medium"
    return "easy"


def estimate_target_audience(category_tags: str | None) -> str:
    if not category_tags:
        return "General"
    tags = category_tags.lower()
    for keywords, audience in AUDIENCE_KEYWORDS:
        if any(k in tags for k in keywords):
            return audience
    return "General"


def normalize_row(
    row: dict[str, Any],
    similarity: float | None = None,
    category_hint: str | None = None,
) -> dict[str, Any]:
    """Convert an ideas-store row into the Idea shape."""
    upvotes = row.get("upvotes") or 0
    tags_raw = row.get("category_tags")
    noun = f"{category_hint} solution" if category_hint else "solution"

    category = extract_primary_category(tags_raw) if tags_raw else (category_hint or "Technology")
    tags = _split_tags(tags_raw)[:MAX_TAGS] or [category_hint or "Technology"]

    return {
        "id": row.get("id"),
        "title": row.get("name") or row.get("title") or "Untitled idea",
        "description": (
            row.get("product_description")
            or row.get("description")
            or f"Innovative {noun} with {upvotes} upvotes from the community."
        ),
        "category": category,
        "difficulty": estimate_difficulty(upvotes),
        "target_audience": estimate_target_audience(tags_raw),
        "tags": tags,
        "upvotes": upvotes,
        "source": "product_hunt",
        "similarity": row.get("similarity", 0) if similarity is None else similarity,
    }


# =============================================================================
# Search strategies
# =============================================================================


class SearchStrategy(Protocol):
    """One tier of the search cascade. Raises to hand over to the next tier."""

    name: str

    async def search(self, query: str, limit: int, threshold: float) -> list[dict[str, Any]]:
        ...


class VectorSearchStrategy:
    """Embed the query once and try each pgvector similarity RPC in turn."""

    name = "vector"

    def __init__(self, rpc_names: tuple[str, ...]):
        self.rpc_names = rpc_names

    async def search(self, query: str, limit: int, threshold: float) -> list[dict[str, Any]]:
        embedding = await embed_text(query)
        params = {
            "query_embedding": embedding,
            "match_threshold": threshold,
            "match_count": limit,
        }
        last_error: Exception | None = None
        for rpc_name in self.rpc_names:
            try:
                response = get_ideas_supabase().rpc(rpc_name, params).execute()
            except Exception as e:
                logger.warning(f"Similarity RPC {rpc_name} failed: {e}")
                last_error = e
                continue
            return [normalize_row(row) for row in response.data or []]

        raise last_error or RuntimeError("No similarity RPC configured")


class KeywordSearchStrategy:
    """ILIKE match on the first meaningful search term."""

    name = "keyword"

    async def search(self, query: str, limit: int, threshold: float) -> list[dict[str, Any]]:
        terms = [t for t in query.lower().split(" ") if len(t) > 2]
        builder = get_ideas_supabase().table(IDEAS_TABLE).select("*").limit(limit)
        if terms:
            term = terms[0]
            builder = builder.or_(
                f"name.ilike.%{term}%,"
                f"product_description.ilike.%{term}%,"
                f"category_tags.ilike.%{term}%"
            )
        response = builder.execute()
        return [normalize_row(row, similarity=KEYWORD_SIMILARITY) for row in response.data or []]


DEFAULT_CASCADE: list[SearchStrategy] = [
    VectorSearchStrategy(("match_startup_ideas", "match_ideas")),
    KeywordSearchStrategy(),
]


async def search_similar_ideas(
    query: str,
    limit: int = 5,
    threshold: float = 0.7,
    strategies: list[SearchStrategy] | None = None,
) -> list[dict[str, Any]]:
    """
    Find ideas related to free text, degrading through the search cascade.

    Args:
        query: Search text
        limit: Maximum number of ideas (also the RPC match_count)
        threshold: Minimum similarity for vector tiers

    Returns:
        Ideas sorted by similarity descending (stable for ties); empty if every
        tier failed
    """
    for strategy in strategies or DEFAULT_CASCADE:
        try:
            ideas = await strategy.search(query, limit, threshold)
        except Exception as e:
            logger.warning(f"Idea search tier {strategy.name} failed: {e}")
            continue
        logger.debug(f"Idea search tier {strategy.name} returned {len(ideas)} ideas")
        return sorted(ideas, key=lambda i: i.get("similarity") or 0, reverse=True)

    logger.error("All idea search tiers failed")
    return []


def get_random_ideas(limit: int = 5) -> list[dict[str, Any]]:
    """Sample popular ideas and shuffle them; marked with a low similarity."""
    try:
        response = (
            get_ideas_supabase()
            .table(IDEAS_TABLE)
            .select("*")
            .order("upvotes", desc=True)
            .limit(limit * 2)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Random idea sampling failed: {e}")
        return []

    rows = list(response.data or [])
    random.shuffle(rows)
    return [normalize_row(row, similarity=RANDOM_SIMILARITY) for row in rows[:limit]]


def search_by_category(category: str, limit: int = 5) -> list[dict[str, Any]]:
    """Most upvoted ideas tagged with a category; random sample on failure."""
    try:
        response = (
            get_ideas_supabase()
            .table(IDEAS_TABLE)
            .select("*")
            .ilike("category_tags", f"%{category}%")
            .order("upvotes", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        logger.warning(f"Category search for {category!r} failed: {e}")
        return get_random_ideas(limit)

    return [
        normalize_row(row, similarity=CATEGORY_SIMILARITY, category_hint=category)
        for row in response.data or []
    ]
