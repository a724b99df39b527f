"""Shared route dependencies."""

from fastapi import HTTPException

from ideavault.db.supabase_client import is_supabase_configured


def require_user_store() -> None:
    """503 when the user-data database is not configured."""
    if not is_supabase_configured():
        raise HTTPException(
            status_code=503,
            detail="Database configuration required. Please contact your administrator.",
        )
