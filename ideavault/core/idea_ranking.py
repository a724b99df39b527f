"""Deduplication, ranking and template fallbacks for generated ideas.

Pure functions over Idea-shaped dicts; no I/O.
"""

import re
from typing import Any

FREEFORM_QUERY_SUFFIX = (
    "Focus industry/domain extraction and generate ideas ONLY within that domain."
)
DEFAULT_SEARCH_QUERY = "innovative business idea"
FALLBACK_SIMILARITY = 0.3
PROMPT_CONTEXT_CHARS = 100

# Structured fallback titles, cycled by index
STRUCTURED_TEMPLATES = [
    {
        "title": "Innovative {category} Solution for {audience}",
        "description": (
            "A cutting-edge {category_lower} platform designed specifically for "
            "{audience_lower}. This solution addresses key challenges in the "
            "{category_lower} space with modern technology and user-centric design."
        ),
    },
    {
        "title": "{audience} {category} Marketplace",
        "description": (
            "A curated marketplace connecting {audience_lower} with trusted "
            "{category_lower} providers, with reviews, transparent pricing and "
            "simple onboarding for both sides."
        ),
    },
    {
        "title": "Smart {category} Assistant for {audience}",
        "description": (
            "An AI assistant that automates routine {category_lower} tasks for "
            "{audience_lower}, surfacing recommendations and reminders so users "
            "spend less time on busywork."
        ),
    },
    {
        "title": "{category} Analytics Platform for {audience}",
        "description": (
            "A dashboard that turns scattered {category_lower} data into clear "
            "insights for {audience_lower}, with benchmarks, alerts and exportable "
            "reports."
        ),
    },
]

FREEFORM_TEMPLATES = [
    {
        "title": "AI-Powered {keyword} Platform",
        "description": (
            'An innovative solution that addresses the challenges mentioned in your '
            'request: "{prompt}". This platform combines modern technology with '
            "user-centric design to deliver exceptional results."
        ),
    },
    {
        "title": "{keyword} Community Hub",
        "description": (
            'An online community built around your request: "{prompt}". Members '
            "share resources, find partners and get expert answers in one place."
        ),
    },
    {
        "title": "On-Demand {keyword} Service",
        "description": (
            'A service business that delivers what your request describes: "{prompt}". '
            "Bookings, payments and follow-ups run through a simple mobile app."
        ),
    },
    {
        "title": "{keyword} Subscription Box",
        "description": (
            'A recurring subscription inspired by your request: "{prompt}". Each '
            "delivery is personalised from customer feedback to keep retention high."
        ),
    },
]


def normalize_title(title: str | None) -> str:
    """Lowercase and strip everything except ASCII letters and digits."""
    return re.sub(r"[^a-z0-9]", "", (title or "").lower())


def remove_duplicates(ideas: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop ideas whose normalized title was already seen; first one wins."""
    seen: set[str] = set()
    unique = []
    for idea in ideas:
        key = normalize_title(idea.get("title"))
        if key in seen:
            continue
        seen.add(key)
        unique.append(idea)
    return unique


def build_search_query(
    request_type: str,
    data: dict[str, Any] | None = None,
    prompt: str | None = None,
) -> str:
    """Turn a generation request into search text."""
    if request_type == "freeform" and prompt and prompt.strip():
        return f"{prompt.strip()}. {FREEFORM_QUERY_SUFFIX}"

    data = data or {}
    parts = []
    if data.get("category"):
        parts.append(f"{data['category']} business")
    if data.get("difficulty"):
        parts.append(f"{data['difficulty']} difficulty")
    if data.get("targetAudience"):
        parts.append(f"for {data['targetAudience']}")
    if data.get("budget"):
        parts.append(f"budget {data['budget']}")
    if data.get("timeline"):
        parts.append(f"timeline {data['timeline']}")
    if data.get("interests"):
        parts.append(f"interests: {data['interests']}")
    return " ".join(parts) or DEFAULT_SEARCH_QUERY


# =============================================================================
# Structured ranking
# =============================================================================


def calculate_relevance_score(idea: dict[str, Any], data: dict[str, Any]) -> float:
    """Similarity (0.5 when absent) plus boosts for category, audience and popularity."""
    score = idea.get("similarity") or 0.5

    category = (data.get("category") or "").lower()
    if idea.get("category") and category in idea["category"].lower():
        score += 0.2

    audience = (data.get("targetAudience") or "").lower()
    if idea.get("target_audience") and audience in idea["target_audience"].lower():
        score += 0.1

    if (idea.get("upvotes") or 0) > 100:
        score += 0.1

    return min(score, 1.0)


def apply_user_preferences(
    ideas: list[dict[str, Any]], data: dict[str, Any]
) -> list[dict[str, Any]]:
    """
    Score ideas against the user's choices, then stamp those choices on them.

    Scores are computed from the retrieved values before they are overwritten,
    otherwise every idea would get the category and audience boosts.
    """
    ranked = []
    for idea in ideas:
        ranked.append(
            {
                **idea,
                "relevance_score": calculate_relevance_score(idea, data),
                "category": data.get("category") or idea.get("category"),
                "difficulty": data.get("difficulty") or idea.get("difficulty"),
                "target_audience": data.get("targetAudience") or idea.get("target_audience"),
            }
        )
    ranked.sort(key=lambda i: i["relevance_score"], reverse=True)
    return ranked


# =============================================================================
# Freeform ranking
# =============================================================================


def extract_keywords(prompt: str) -> list[str]:
    return [w for w in prompt.lower().split(" ") if len(w) > 3]


def calculate_prompt_relevance(idea: dict[str, Any], keywords: list[str]) -> float:
    """Fraction of prompt keywords found in title + description."""
    if not keywords:
        return 0.0
    text = f"{idea.get('title', '')} {idea.get('description', '')}".lower()
    return sum(1 for k in keywords if k in text) / len(keywords)


def enhance_description(description: str, prompt: str) -> str:
    excerpt = prompt[:PROMPT_CONTEXT_CHARS] + ("..." if len(prompt) > PROMPT_CONTEXT_CHARS else "")
    return f'{description}\n\nThis idea aligns with your request: "{excerpt}"'


def enhance_with_prompt_context(
    ideas: list[dict[str, Any]], prompt: str
) -> list[dict[str, Any]]:
    """Rank by prompt keyword overlap and append the prompt to each description."""
    keywords = extract_keywords(prompt)
    enhanced = [
        {
            **idea,
            "prompt_relevance": calculate_prompt_relevance(idea, keywords),
            "description": enhance_description(idea.get("description", ""), prompt),
        }
        for idea in ideas
    ]
    enhanced.sort(key=lambda i: i["prompt_relevance"], reverse=True)
    return enhanced


# =============================================================================
# Template fallbacks
# =============================================================================


def _fill_from_templates(
    templates: list[dict[str, str]],
    values: dict[str, str],
    needed: int,
    seen: set[str],
    base: dict[str, Any],
) -> list[dict[str, Any]]:
    ideas: list[dict[str, Any]] = []
    index = 0
    # Every full cycle yields at least one new title thanks to the numeric suffix
    max_iterations = (needed + len(seen) + 1) * len(templates)
    while len(ideas) < needed and index < max_iterations:
        template = templates[index % len(templates)]
        cycle = index // len(templates)
        title = template["title"].format(**values)
        if cycle:
            title = f"{title} {cycle + 1}"
        index += 1

        key = normalize_title(title)
        if key in seen:
            continue
        seen.add(key)
        ideas.append(
            {
                **base,
                "title": title,
                "description": template["description"].format(**values),
                "source": "fallback",
                "upvotes": 0,
                "similarity": FALLBACK_SIMILARITY,
            }
        )
    return ideas


def generate_fallback_ideas(
    data: dict[str, Any],
    count: int,
    existing: list[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """
    Template ideas for a structured request, skipping titles already present.

    Args:
        data: Structured input (category, difficulty, targetAudience)
        count: Number of ideas to produce
        existing: Ideas already in the result; their titles are not repeated

    Returns:
        Exactly ``count`` ideas with ``source`` "fallback"
    """
    category = data.get("category") or "Technology"
    audience = data.get("targetAudience") or "General"
    difficulty = data.get("difficulty") or "medium"
    values = {
        "category": category,
        "audience": audience,
        "category_lower": category.lower(),
        "audience_lower": audience.lower(),
    }
    base = {
        "category": category,
        "difficulty": difficulty,
        "target_audience": audience,
        "tags": [category, audience, difficulty, "Innovation"],
    }
    seen = {normalize_title(i.get("title")) for i in existing or []}
    return _fill_from_templates(STRUCTURED_TEMPLATES, values, count, seen, base)


def generate_fallback_ideas_from_prompt(
    prompt: str,
    count: int,
    existing: list[dict[str, Any]] | None = None,
) -> list[dict[str, Any]]:
    """Template ideas interpolated with the first prompt keyword."""
    keywords = extract_keywords(prompt)
    primary = keywords[0] if keywords else "innovation"
    values = {"keyword": primary[:1].upper() + primary[1:], "prompt": prompt}
    base = {
        "category": "Technology",
        "difficulty": "medium",
        "target_audience": "General",
        "tags": [primary, "AI", "Innovation", "Custom"],
    }
    seen = {normalize_title(i.get("title")) for i in existing or []}
    return _fill_from_templates(FREEFORM_TEMPLATES, values, count, seen, base)
