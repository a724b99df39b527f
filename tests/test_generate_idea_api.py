"""Tests for POST /api/generate-idea with the search, Gemini and user store mocked."""

from itertools import count as counter
from unittest.mock import AsyncMock, patch

import pytest

from ideavault.chains.synthesize_ideas import synthesize_ideas
from ideavault.core.idea_ranking import normalize_title

STRUCTURED = {"category": "Technology", "difficulty": "easy", "targetAudience": "Developers"}
SERVICE = "ideavault.services.idea_generation"


def _db_idea(title, similarity=0.8):
    return {
        "id": abs(hash(title)) % 10_000,
        "title": title,
        "description": f"{title} description",
        "category": "Productivity",
        "difficulty": "medium",
        "target_audience": "Businesses",
        "tags": ["productivity"],
        "upvotes": 300,
        "source": "product_hunt",
        "similarity": similarity,
    }


@pytest.fixture
def pipeline():
    """Patch every external dependency of the generation pipeline."""
    ids = counter(1000)

    def _save(user_id, idea):
        return {**idea, "id": next(ids)}

    with patch(f"{SERVICE}.search_similar_ideas", new_callable=AsyncMock, return_value=[]) as search, \
            patch(f"{SERVICE}.search_by_category", return_value=[]) as by_category, \
            patch(f"{SERVICE}.get_random_ideas", return_value=[]) as random_ideas, \
            patch(f"{SERVICE}.synthesize_ideas", new_callable=AsyncMock, return_value=[]) as synthesize, \
            patch(f"{SERVICE}.save_user_idea", side_effect=_save) as save:
        yield {
            "search": search,
            "by_category": by_category,
            "random": random_ideas,
            "synthesize": synthesize,
            "save": save,
        }


def test_structured_multiple_with_llm_down_returns_templates(client, pipeline):
    with patch(
        "ideavault.chains.synthesize_ideas.generate_text",
        new_callable=AsyncMock,
        side_effect=TimeoutError("Request timeout after 3 attempts"),
    ):
        pipeline["synthesize"].side_effect = synthesize_ideas
        response = client.post(
            "/api/generate-idea",
            json={"type": "structured", "data": STRUCTURED, "multiple": True, "count": 3},
        )

    assert response.status_code == 200
    body = response.json()
    assert [i["title"] for i in body["ideas"]] == [
        "Innovative Technology Solution for Developers",
        "Developers Technology Marketplace",
        "Smart Technology Assistant for Developers",
    ]
    assert all(i["source"] == "fallback" for i in body["ideas"])
    assert body["ai_generated"] == 0
    assert body["database_matched"] == 0
    assert body["source"] == "hybrid_vector_gemini"
    assert body["model"] == "gemini-2.5-flash"
    assert "prompt" not in body
    assert pipeline["save"].call_count == 3
    assert [i["id"] for i in body["ideas"]] == [1000, 1001, 1002]
    assert all(i["user_id"] == "user_test_123" for i in body["ideas"])


def test_structured_top_up_order(client, pipeline):
    pipeline["search"].return_value = [_db_idea("Vector Match")]
    pipeline["by_category"].return_value = [_db_idea("Category Match", 0.8)]
    pipeline["random"].return_value = [_db_idea("Random Match", 0.3)]

    response = client.post(
        "/api/generate-idea",
        json={"type": "structured", "data": STRUCTURED, "multiple": True, "count": 4},
    )

    assert response.status_code == 200
    pipeline["search"].assert_awaited_once()
    args = pipeline["search"].await_args.args
    assert args[0] == "Technology business easy difficulty for Developers"
    assert args[1] == 8
    assert args[2] == 0.6
    pipeline["by_category"].assert_called_once_with("Technology", 4)
    pipeline["random"].assert_called_once_with(4)

    ideas = response.json()["ideas"]
    assert len(ideas) == 4
    # Ranked ideas take on the requested attributes
    for idea in ideas[:3]:
        assert idea["category"] == "Technology"
        assert idea["target_audience"] == "Developers"


def test_synthesized_duplicates_are_removed_and_count_exact(client, pipeline):
    pipeline["search"].return_value = [
        _db_idea("Pet-Walker"),
        _db_idea("Meal Planner"),
        _db_idea("Budget Buddy"),
        _db_idea("Habit Tracker"),
    ]
    pipeline["synthesize"].return_value = [
        {"id": "gemini_1", "title": "Pet Walker", "description": "Dog walking", "source": "gemini_synthesis"},
        {"id": "gemini_2", "title": "Plant Doctor", "description": "Plant care", "source": "gemini_synthesis"},
    ]

    response = client.post(
        "/api/generate-idea",
        json={"type": "structured", "data": STRUCTURED, "multiple": True, "count": 3},
    )

    body = response.json()
    titles = [i["title"] for i in body["ideas"]]
    assert len(titles) == 3
    assert len({normalize_title(t) for t in titles}) == 3
    assert titles[:2] == ["Pet Walker", "Plant Doctor"]
    assert body["ai_generated"] == 2
    assert body["database_matched"] == 4
    assert body["total"] == 5
    pipeline["by_category"].assert_not_called()
    # ceil(3 / 2) ideas requested from Gemini
    assert pipeline["synthesize"].await_args.args[2] == 2


def test_freeform_single_returns_one_object(client, pipeline):
    pipeline["search"].return_value = [_db_idea("Senior Fitness Classes")]
    pipeline["synthesize"].return_value = [
        {"id": "gemini_9", "title": "Silver Strength", "description": "Coached workouts", "source": "gemini_synthesis"},
    ]

    response = client.post(
        "/api/generate-idea",
        json={"type": "freeform", "prompt": "  fitness app for seniors "},
    )

    assert response.status_code == 200
    idea = response.json()
    assert idea["title"] == "Silver Strength"
    assert idea["status"] == "saved"
    assert pipeline["synthesize"].await_args.args[1] == "fitness app for seniors"
    assert pipeline["synthesize"].await_args.args[2] == 1
    assert pipeline["search"].await_args.args[1] == 10
    assert pipeline["save"].call_count == 1


def test_freeform_multiple_echoes_prompt(client, pipeline):
    response = client.post(
        "/api/generate-idea",
        json={"type": "freeform", "prompt": "fitness app for seniors", "multiple": True, "count": 2},
    )

    body = response.json()
    assert body["prompt"] == "fitness app for seniors"
    assert [i["title"] for i in body["ideas"]] == [
        "AI-Powered Fitness Platform",
        "Fitness Community Hub",
    ]


def test_persist_failure_still_returns_ideas(client, pipeline):
    pipeline["save"].side_effect = RuntimeError("insert failed")

    response = client.post(
        "/api/generate-idea",
        json={"type": "structured", "data": STRUCTURED, "multiple": True, "count": 2},
    )

    assert response.status_code == 200
    assert len(response.json()["ideas"]) == 2


@pytest.mark.parametrize("count", [0, 11])
def test_count_out_of_range_is_400_without_side_effects(client, pipeline, count):
    response = client.post(
        "/api/generate-idea",
        json={"type": "structured", "data": STRUCTURED, "multiple": True, "count": count},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Count must be between 1 and 10 for multiple generation"}
    pipeline["search"].assert_not_awaited()
    pipeline["save"].assert_not_called()


@pytest.mark.parametrize(
    "body,message",
    [
        ({"type": "structured", "data": {"category": "Tech"}}, "Missing required fields: category, difficulty, targetAudience"),
        ({"type": "freeform", "prompt": "   "}, "Prompt is required for freeform generation"),
        ({"type": "poem"}, 'Invalid type. Must be "structured" or "freeform"'),
        ({}, 'Invalid type. Must be "structured" or "freeform"'),
    ],
)
def test_invalid_requests_are_400(client, pipeline, body, message):
    response = client.post("/api/generate-idea", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == message


def test_unexpected_failure_is_generic_500(client):
    with patch(
        "ideavault.api.generate_idea.generate_ideas",
        new_callable=AsyncMock,
        side_effect=RuntimeError("boom"),
    ):
        response = client.post("/api/generate-idea", json={"type": "freeform", "prompt": "x"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate idea. Please try again."}


def test_requires_auth(anon_client):
    response = anon_client.post("/api/generate-idea", json={"type": "freeform", "prompt": "x"})
    assert response.status_code == 401
