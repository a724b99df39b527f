"""Tests for the user data endpoints: ideas, milestones, preferences, credits,
profile, share links and system logs (Supabase mocked)."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import pytest

from ideavault.api.milestones import apply_progress_rules
from ideavault.core.config import get_settings
from tests.fakes.supabase_mock import FakeAPIError, mock_supabase

USER_ID = "user_test_123"


# ============================================================================
# Saved ideas
# ============================================================================


class TestSavedIdeas:
    def test_save_idea_applies_defaults(self, client):
        sb = mock_supabase([MagicMock(data=[{"id": 5, "title": "Pet Walker"}])])

        with patch("ideavault.db.user_ideas.get_user_supabase", return_value=sb):
            response = client.post(
                "/api/save-idea", json={"title": "Pet Walker", "description": "Dog walking"}
            )

        assert response.status_code == 200
        assert response.json() == {"success": True, "idea": {"id": 5, "title": "Pet Walker"}}
        inserted = sb.table.return_value.insert.call_args.args[0]
        assert inserted["category"] == "Other"
        assert inserted["difficulty"] == "medium"
        assert inserted["target_audience"] == "General"
        assert inserted["status"] == "saved"
        assert inserted["user_id"] == USER_ID

    def test_save_idea_requires_title_and_description(self, client):
        response = client.post("/api/save-idea", json={"title": "Only title"})
        assert response.status_code == 400

    def test_save_idea_without_table_returns_unsaved_record(self, client):
        sb = mock_supabase([FakeAPIError("relation not found", code="PGRST205")])

        with patch("ideavault.db.user_ideas.get_user_supabase", return_value=sb):
            response = client.post("/api/save-idea", json={"title": "A", "description": "B"})

        assert response.status_code == 200
        assert isinstance(response.json()["idea"]["id"], int)

    def test_missing_idea_is_404(self, client):
        with patch("ideavault.api.ideas.ideas_db.get_user_idea", return_value=None):
            response = client.get("/api/ideas/999")

        assert response.status_code == 404
        assert response.json() == {"error": "Idea not found"}

    def test_patch_requires_a_field(self, client):
        assert client.patch("/api/ideas/1", json={}).status_code == 400

    def test_patch_rejects_unknown_status(self, client):
        assert client.patch("/api/ideas/1", json={"status": "done"}).status_code == 400

    def test_unconfigured_store_is_503(self, client, monkeypatch):
        monkeypatch.setenv("SUPABASE_USER_URL", "")
        get_settings.cache_clear()
        response = client.get("/api/ideas")

        assert response.status_code == 503

    def test_report_conflict_is_409(self, client):
        with patch("ideavault.api.ideas.ideas_db.get_user_idea", return_value={"id": 1}), \
                patch("ideavault.api.ideas.reports_db.get_idea_report", return_value={"id": 9}):
            response = client.post("/api/ideas/1/report", json={})

        assert response.status_code == 409
        assert response.json() == {"error": "Report already exists"}

    def test_report_sections_default_to_empty(self, client):
        with patch("ideavault.api.ideas.ideas_db.get_user_idea", return_value={"id": 1}), \
                patch("ideavault.api.ideas.reports_db.get_idea_report", return_value=None), \
                patch("ideavault.api.ideas.reports_db.create_idea_report", side_effect=lambda u, i, d: d) as create:
            response = client.post(
                "/api/ideas/1/report",
                json={"business_concept": {"elevator_pitch": "Pitch"}, "mvp_prompt": "Build"},
            )

        assert response.status_code == 200
        report = create.call_args.args[2]
        assert report["business_concept"] == {"elevator_pitch": "Pitch"}
        assert report["evaluation"] == {}
        assert report["mvp_prompt"] == "Build"
        assert "model" not in report


class TestExplore:
    def test_query_uses_search_and_filters_category(self, anon_client):
        ideas = [
            {"title": "A", "category": "Finance", "tags": []},
            {"title": "B", "category": "Technology", "tags": ["fintech"]},
            {"title": "C", "category": "Technology", "tags": ["ai"]},
        ]
        with patch("ideavault.api.ideas.idea_search.search_similar_ideas", return_value=ideas) as search:
            response = anon_client.get("/api/ideas/explore", params={"q": "money", "category": "fin"})

        assert response.status_code == 200
        assert [i["title"] for i in response.json()["ideas"]] == ["A", "B"]
        search.assert_awaited_once_with("money", 12)

    def test_category_only(self, anon_client):
        with patch("ideavault.api.ideas.idea_search.search_by_category", return_value=[]) as by_category:
            anon_client.get("/api/ideas/explore", params={"category": "Health", "limit": 5})
        by_category.assert_called_once_with("Health", 5)

    def test_default_is_random(self, anon_client):
        with patch("ideavault.api.ideas.idea_search.get_random_ideas", return_value=[{"title": "X"}]):
            response = anon_client.get("/api/ideas/explore", params={"category": "All Categories"})
        assert response.json()["total"] == 1

    @pytest.mark.parametrize("limit", [0, 51])
    def test_invalid_limit(self, anon_client, limit):
        response = anon_client.get("/api/ideas/explore", params={"limit": limit})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid pagination parameters"}


# ============================================================================
# Milestones
# ============================================================================


class TestMilestones:
    def test_progress_rules(self):
        assert apply_progress_rules({"status": "completed", "completion_percentage": 40}) == {
            "status": "completed",
            "completion_percentage": 100,
        }
        assert apply_progress_rules({"status": "in_progress"})["completion_percentage"] == 25
        assert apply_progress_rules({"status": "in_progress", "completion_percentage": 60})[
            "completion_percentage"
        ] == 60
        assert apply_progress_rules({"title": "x"}) == {"title": "x"}

    def test_create_requires_title(self, client):
        response = client.post("/api/milestones", json={"title": "   "})
        assert response.status_code == 400
        assert response.json() == {"error": "Title is required"}

    def test_create_with_defaults(self, client):
        sb = mock_supabase([MagicMock(data=[{"id": "m1"}])])

        with patch("ideavault.db.milestones.get_user_supabase", return_value=sb):
            response = client.post("/api/milestones", json={"title": " Launch beta "})

        assert response.status_code == 200
        inserted = sb.table.return_value.insert.call_args.args[0]
        assert inserted["title"] == "Launch beta"
        assert inserted["status"] == "not_started"
        assert inserted["priority"] == "medium"
        assert inserted["completion_percentage"] == 0
        assert inserted["user_id"] == USER_ID

    def test_patch_completed_sets_100(self, client):
        sb = mock_supabase([MagicMock(data=[{"id": "m1", "status": "completed"}])])

        with patch("ideavault.db.milestones.get_user_supabase", return_value=sb):
            response = client.patch("/api/milestones/m1", json={"status": "completed"})

        assert response.status_code == 200
        payload = sb.table.return_value.update.call_args.args[0]
        assert payload["completion_percentage"] == 100
        assert "title" not in payload

    def test_put_unknown_milestone_is_404(self, client):
        sb = mock_supabase([MagicMock(data=[])])

        with patch("ideavault.db.milestones.get_user_supabase", return_value=sb):
            response = client.put("/api/milestones/nope", json={"title": "New"})

        assert response.status_code == 404
        assert response.json() == {"error": "Milestone not found"}

    def test_invalid_status_is_400(self, client):
        response = client.patch("/api/milestones/m1", json={"status": "paused"})
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request: status")

    def test_delete(self, client):
        with patch("ideavault.api.milestones.milestones_db.delete_milestone", return_value=True):
            response = client.delete("/api/milestones/m1")
        assert response.json() == {"success": True, "message": "Milestone deleted successfully"}


# ============================================================================
# Preferences
# ============================================================================


class TestPreferences:
    def test_defaults_applied(self, client):
        with patch(
            "ideavault.api.preferences.preferences_db.upsert_user_preferences",
            side_effect=lambda user_id, data: data,
        ):
            response = client.post("/api/preferences", json={"interests": "  fintech "})

        assert response.json()["preferences"] == {
            "interests": "fintech",
            "experience_level": "Beginner",
            "time_commitment": "Part-time",
            "capital_available": None,
            "preferred_ai_role": "advisor",
            "target_audience": [],
        }

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"experience_level": "Guru"}, "Invalid experience level"),
            ({"time_commitment": "Weekends"}, "Invalid time commitment"),
            ({"capital_available": -5}, "Invalid capital amount"),
            ({"capital_available": "lots"}, "Invalid capital amount"),
        ],
    )
    def test_validation(self, client, body, message):
        response = client.post("/api/preferences", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": message}

    def test_capital_parsed_from_string(self, client):
        with patch(
            "ideavault.api.preferences.preferences_db.upsert_user_preferences",
            side_effect=lambda user_id, data: data,
        ):
            response = client.post("/api/preferences", json={"capital_available": "2500.50"})
        assert response.json()["preferences"]["capital_available"] == 2500.5


# ============================================================================
# Credits and profile
# ============================================================================


class TestCredits:
    def test_first_access_creates_row(self, client):
        created = {"user_id": USER_ID, "total_credits": 10, "used_credits": 0}
        sb = mock_supabase([FakeAPIError("no rows", code="PGRST116"), MagicMock(data=[created])])

        with patch("ideavault.db.credits.get_user_supabase", return_value=sb):
            response = client.get("/api/credits")

        assert response.json() == {"success": True, "credits": created}

    def test_missing_table_returns_defaults(self, client):
        sb = mock_supabase([FakeAPIError("missing", code="PGRST205")])

        with patch("ideavault.db.credits.get_user_supabase", return_value=sb):
            credits = client.get("/api/credits").json()["credits"]

        assert credits["credits"] == 100
        assert credits["premium_credits"] == 10

    @pytest.mark.parametrize("used", [-1, "5", True, None])
    def test_invalid_amount(self, client, used):
        response = client.post("/api/credits", json={"used_credits": used})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid credits amount"}

    def test_update(self, client):
        with patch(
            "ideavault.api.credits.credits_db.update_user_credits",
            return_value={"used_credits": 3},
        ) as update:
            response = client.post("/api/credits", json={"used_credits": 3})

        assert response.status_code == 200
        update.assert_called_once_with(USER_ID, 3)


class TestProfile:
    def test_default_profile_when_missing(self, client):
        with patch("ideavault.api.profile.profiles_db.get_user_profile", return_value=None):
            profile = client.get("/api/profile").json()["profile"]
        assert profile["username"] == "demo_user"

    def test_put_requires_a_field(self, client):
        response = client.put("/api/profile", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "At least one field must be provided"}


# ============================================================================
# Share links
# ============================================================================


def _shared(expires_in: timedelta, views: int = 2) -> dict:
    return {
        "id": "share-1",
        "idea_data": {"title": "Pet Walker"},
        "report_data": {"business_concept": {}},
        "created_at": "2026-01-01T00:00:00+00:00",
        "expires_at": (datetime.now(timezone.utc) + expires_in).isoformat(),
        "view_count": views,
    }


class TestShareReport:
    BODY = {"ideaId": 1, "reportData": {"a": 1}, "ideaData": {"title": "Pet Walker"}}

    def test_create_link(self, client):
        with patch(
            "ideavault.api.share_report.shared_db.create_shared_report",
            return_value={"id": "share-1"},
        ):
            body = client.post("/api/share-report", json=self.BODY).json()

        assert len(body["shareToken"]) == 64
        assert body["shareUrl"] == f"http://localhost:3000/share/{body['shareToken']}"
        assert body["reportId"] == "share-1"
        expires = datetime.fromisoformat(body["expiresAt"])
        assert timedelta(days=29) < expires - datetime.now(timezone.utc) <= timedelta(days=30)

    def test_create_link_falls_back_when_store_fails(self, client):
        with patch(
            "ideavault.api.share_report.shared_db.create_shared_report",
            side_effect=RuntimeError("db down"),
        ):
            body = client.post("/api/share-report", json=self.BODY).json()

        assert body["fallback"] is True
        assert body["message"] == "Share link created (temporary - not persisted)"

    def test_create_requires_fields(self, client):
        response = client.post("/api/share-report", json={"ideaId": 1})
        assert response.status_code == 400

    def test_resolve_counts_view(self, anon_client):
        with patch(
            "ideavault.api.share_report.shared_db.get_active_shared_report",
            return_value=_shared(timedelta(days=1)),
        ), patch("ideavault.api.share_report.shared_db.record_view") as record_view:
            response = anon_client.get("/api/share-report", params={"token": "abc"})

        assert response.status_code == 200
        assert response.json()["viewCount"] == 3
        assert response.json()["ideaData"] == {"title": "Pet Walker"}
        record_view.assert_called_once_with("share-1", 3)

    def test_expired_link_is_410(self, anon_client):
        with patch(
            "ideavault.api.share_report.shared_db.get_active_shared_report",
            return_value=_shared(timedelta(days=-1)),
        ), patch("ideavault.api.share_report.shared_db.record_view") as record_view:
            response = anon_client.get("/api/share-report", params={"token": "abc"})

        assert response.status_code == 410
        record_view.assert_not_called()

    def test_unknown_link_is_404(self, anon_client):
        with patch(
            "ideavault.api.share_report.shared_db.get_active_shared_report",
            return_value=None,
        ):
            response = anon_client.get("/api/share-report", params={"token": "abc"})

        assert response.status_code == 404
        assert response.json() == {"error": "Share link not found or expired"}

    def test_missing_token_is_400(self, anon_client):
        assert anon_client.get("/api/share-report").status_code == 400


# ============================================================================
# System logs
# ============================================================================


class TestSystemLogs:
    def test_anonymous_log_recorded(self, anon_client):
        with patch(
            "ideavault.api.system_logs.logs_db.create_system_log",
            return_value={"id": "log-1"},
        ) as create:
            response = anon_client.post(
                "/api/system-logs",
                json={"operation": "report", "status": "error", "message": "Boom"},
                headers={"x-forwarded-for": "10.0.0.1"},
            )

        assert response.json()["logId"] == "log-1"
        args = create.call_args.args
        assert args[0] is None
        assert args[5]["ip_address"] == "10.0.0.1"
        assert "timestamp" in args[5]

    def test_store_failure_falls_back(self, anon_client):
        with patch(
            "ideavault.api.system_logs.logs_db.create_system_log",
            side_effect=RuntimeError("db down"),
        ):
            response = anon_client.post(
                "/api/system-logs",
                json={"operation": "report", "status": "info", "message": "Hi"},
            )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Log recorded (fallback mode)",
            "fallback": True,
        }

    def test_invalid_status(self, anon_client):
        response = anon_client.post(
            "/api/system-logs",
            json={"operation": "report", "status": "fatal", "message": "Hi"},
        )
        assert response.status_code == 400

    def test_listing_requires_auth(self, anon_client):
        assert anon_client.get("/api/system-logs").status_code == 401
