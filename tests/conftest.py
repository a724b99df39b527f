"""Pytest configuration and fixtures."""

import os

import pytest

# Set before any ideavault import caches Settings
os.environ.update(
    {
        "IDEAVAULT_ENV": "test",
        "CLERK_PUBLISHABLE_KEY": "pk_test_ideavault",
        "CLERK_SECRET_KEY": "sk_test_ideavault",
        "SUPABASE_IDEAS_URL": "https://ideas.test.supabase.co",
        "SUPABASE_IDEAS_ANON_KEY": "ideas-anon-key",
        "SUPABASE_USER_URL": "https://users.test.supabase.co",
        "SUPABASE_USER_ANON_KEY": "users-anon-key",
        "SUPABASE_USER_SERVICE_ROLE_KEY": "users-service-key",
        "GOOGLE_GEMINI_API_KEY": "test-gemini-key",
        "APP_URL": "http://localhost:3000",
        "LLM_RETRY_BASE_DELAY_SECONDS": "0",
    }
)

from fastapi.testclient import TestClient  # noqa: E402

from ideavault.core.auth import AuthContext, require_user  # noqa: E402
from ideavault.core.config import get_settings  # noqa: E402
from ideavault.core.env_validator import reset_validation_cache  # noqa: E402
from ideavault.core.memory_store import reset_memory_stores  # noqa: E402
from ideavault.main import app  # noqa: E402

USER_ID = "user_test_123"


@pytest.fixture(autouse=True)
def reset_state():
    """Fresh settings, validator snapshot, caches and queue for every test."""
    get_settings.cache_clear()
    reset_validation_cache()
    reset_memory_stores()
    yield
    app.dependency_overrides.clear()
    get_settings.cache_clear()
    reset_validation_cache()
    reset_memory_stores()


@pytest.fixture
def client():
    """TestClient authenticated as USER_ID."""
    app.dependency_overrides[require_user] = lambda: AuthContext(user_id=USER_ID, token="test-token")
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def anon_client():
    return TestClient(app, raise_server_exceptions=False)

