"""API endpoint exposing configuration health for UI banners."""

from typing import Any

from fastapi import APIRouter, Query

from ideavault.core.env_validator import (
    get_configuration_errors,
    get_feature_flags,
    validate_client_environment,
    validate_environment,
)

router = APIRouter()


@router.get("/config-status")
async def config_status(
    client: bool = Query(False, description="Only check client-exposed variables"),
) -> dict[str, Any]:
    """Which feature categories are configured. Never exposes variable values."""
    validation = validate_client_environment() if client else validate_environment()
    return {
        "is_valid": validation.is_valid,
        "features": get_feature_flags(client=client),
        "errors": get_configuration_errors(client=client),
        "summary": validation.summary,
    }
