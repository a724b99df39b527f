"""API router for IdeaVault endpoints."""

from fastapi import APIRouter

from ideavault.api import (
    config_status,
    credits,
    generate_idea,
    generate_report,
    ideas,
    milestones,
    preferences,
    profile,
    share_report,
    system_logs,
)

router = APIRouter()

# Generation pipeline
router.include_router(generate_idea.router, tags=["generation"])
router.include_router(generate_report.router, tags=["generation"])

# Saved ideas, stored reports and the public catalogue
router.include_router(ideas.router, tags=["ideas"])

# User data
router.include_router(milestones.router, tags=["milestones"])
router.include_router(preferences.router, tags=["preferences"])
router.include_router(credits.router, tags=["credits"])
router.include_router(profile.router, tags=["profile"])

# Sharing and diagnostics
router.include_router(share_report.router, tags=["share"])
router.include_router(system_logs.router, tags=["system"])
router.include_router(config_status.router, tags=["system"])
