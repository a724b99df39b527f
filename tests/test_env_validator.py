"""Tests for environment validation and the config-status endpoint."""

from ideavault.core.config import get_settings
from ideavault.core.env_validator import (
    get_configuration_errors,
    get_feature_flags,
    is_feature_configured,
    is_placeholder,
    reset_validation_cache,
    validate_category,
    validate_client_environment,
    validate_environment,
)


def _reload():
    get_settings.cache_clear()
    reset_validation_cache()


def test_is_placeholder():
    assert is_placeholder("placeholder-url")
    assert is_placeholder("your-key-here")
    assert is_placeholder("your_google_gemini_api_key_here")
    assert not is_placeholder("AIzaRealKey")


def test_validate_category_partitions_variables():
    result = validate_category("supabase", {"A": "value", "B": "", "C": "your-key-here", "D": None})

    assert result.valid == ["A"]
    assert result.missing == ["B", "D"]
    assert result.invalid == ["C"]
    assert not result.is_valid
    assert result.total_required == 4


def test_fully_configured_environment():
    result = validate_environment()

    assert result.is_valid
    assert get_configuration_errors() is None
    assert get_feature_flags() == {"clerk": True, "supabase": True, "app": True, "ai": True}


def test_missing_and_placeholder_variables(monkeypatch):
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "your_google_gemini_api_key_here")
    monkeypatch.setenv("CLERK_SECRET_KEY", "")
    _reload()

    errors = {e["category"]: e for e in get_configuration_errors()}

    assert errors["ai"]["severity"] == "warning"
    assert errors["ai"]["issues"] == "Invalid: GOOGLE_GEMINI_API_KEY"
    assert errors["clerk"]["severity"] == "error"
    assert errors["clerk"]["issues"] == "Missing: CLERK_SECRET_KEY"
    assert not is_feature_configured("ai")
    assert is_feature_configured("supabase")

    summary = validate_environment().summary
    assert summary["total_missing"] == 1
    assert summary["total_invalid"] == 1
    assert summary["valid_categories"] == 2


def test_client_view_ignores_server_secrets(monkeypatch):
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "")
    _reload()

    result = validate_client_environment()

    assert result.is_valid
    assert result.categories["ai"].is_valid


def test_result_is_cached_until_reset(monkeypatch):
    first = validate_environment()
    monkeypatch.setenv("GOOGLE_GEMINI_API_KEY", "")
    get_settings.cache_clear()

    assert validate_environment() is first

    reset_validation_cache()
    assert not validate_environment().is_valid


def test_config_status_endpoint_hides_values(monkeypatch, anon_client):
    monkeypatch.setenv("SUPABASE_USER_URL", "placeholder")
    _reload()

    response = anon_client.get("/api/config-status")

    assert response.status_code == 200
    body = response.json()
    assert body["is_valid"] is False
    assert body["features"]["supabase"] is False
    assert body["errors"][0]["category"] == "supabase"
    assert "placeholder" not in response.text
    assert "test-gemini-key" not in response.text
