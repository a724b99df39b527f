"""Supabase client initialization.

Two projects back the service: a read-only ideas store (vector search over
imported products) and the user data store (saved ideas, reports,
milestones, preferences, credits).
"""

from functools import lru_cache

from supabase import Client, create_client

from ideavault.core.config import get_settings
from ideavault.core.env_validator import is_placeholder


def _checked(url: str, key: str) -> tuple[str, str]:
    if not url or not key or is_placeholder(url) or is_placeholder(key):
        raise RuntimeError("Supabase not configured")
    return url, key


@lru_cache(maxsize=1)
def get_ideas_supabase() -> Client:
    """
    Get client for the read-only ideas database (cached singleton).

    Raises:
        RuntimeError: If the ideas project is not configured
    """
    settings = get_settings()
    url, key = _checked(settings.SUPABASE_IDEAS_URL, settings.SUPABASE_IDEAS_ANON_KEY)
    try:
        return create_client(url, key)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize ideas Supabase client: {e}") from e


@lru_cache(maxsize=1)
def get_user_supabase() -> Client:
    """
    Get client for the user data database (cached singleton).

    Uses the service role key when present, otherwise the anon key.

    Raises:
        RuntimeError: If the user data project is not configured
    """
    settings = get_settings()
    key = settings.SUPABASE_USER_SERVICE_ROLE_KEY or settings.SUPABASE_USER_ANON_KEY
    url, key = _checked(settings.SUPABASE_USER_URL, key)
    try:
        return create_client(url, key)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize user Supabase client: {e}") from e


def is_supabase_configured() -> bool:
    """True when both projects have non-placeholder URLs and keys."""
    settings = get_settings()
    try:
        _checked(settings.SUPABASE_IDEAS_URL, settings.SUPABASE_IDEAS_ANON_KEY)
        _checked(settings.SUPABASE_USER_URL, settings.SUPABASE_USER_ANON_KEY)
    except RuntimeError:
        return False
    return True


def _error_code(error: Exception) -> str:
    code = getattr(error, "code", None)
    return str(code) if code is not None else ""


def is_table_missing(error: Exception) -> bool:
    """PostgREST PGRST205: the table is not in the schema cache."""
    return _error_code(error) == "PGRST205" or "PGRST205" in str(error)


def is_no_rows(error: Exception) -> bool:
    """PostgREST PGRST116 / HTTP 204: a single-row query matched nothing."""
    code = _error_code(error)
    return code in ("PGRST116", "204") or "PGRST116" in str(error) or "204" in str(error)
