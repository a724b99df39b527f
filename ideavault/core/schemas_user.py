"""Pydantic schemas for user data: milestones, preferences, credits, profile, sharing, logs."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MilestoneStatus = Literal["not_started", "in_progress", "completed", "archived"]
MilestonePriority = Literal["low", "medium", "high"]
LogStatus = Literal["success", "error", "warning", "info"]

EXPERIENCE_LEVELS = ("Beginner", "Intermediate", "Expert")
TIME_COMMITMENTS = ("Part-time", "Full-time")
LOG_STATUSES = ("success", "error", "warning", "info")


# ============================================================================
# Milestones
# ============================================================================


class MilestoneCreate(BaseModel):
    """Body of POST /api/milestones."""

    title: Optional[str] = Field(None, description="Milestone title (required)")
    description: Optional[str] = None
    idea_id: Optional[int | str] = Field(None, description="Linked saved idea")
    status: MilestoneStatus = "not_started"
    priority: MilestonePriority = "medium"
    due_date: Optional[str] = None
    completion_percentage: int = Field(0, ge=0, le=100)


class MilestoneUpdate(BaseModel):
    """Body of PUT and PATCH /api/milestones/{id}."""

    title: Optional[str] = None
    description: Optional[str] = None
    idea_id: Optional[int | str] = None
    status: Optional[MilestoneStatus] = None
    priority: Optional[MilestonePriority] = None
    due_date: Optional[str] = None
    completion_percentage: Optional[int] = Field(None, ge=0, le=100)


# ============================================================================
# Preferences
# ============================================================================


class PreferencesRequest(BaseModel):
    """Body of POST /api/preferences. Enumerations are checked by the route."""

    interests: Optional[str] = None
    experience_level: Optional[str] = None
    time_commitment: Optional[str] = None
    capital_available: Any = None
    preferred_ai_role: Optional[str] = None
    target_audience: Optional[list[str] | str] = None


# ============================================================================
# Credits and profile
# ============================================================================


class CreditsUpdate(BaseModel):
    used_credits: Any = None


class ProfileUpdate(BaseModel):
    """Body of PUT /api/profile."""

    username: Optional[str] = None
    bio: Optional[str] = None
    preferences: Optional[dict[str, Any]] = None


# ============================================================================
# Sharing
# ============================================================================


class ShareReportRequest(BaseModel):
    """Body of POST /api/share-report."""

    model_config = ConfigDict(populate_by_name=True)

    idea_id: Optional[int | str] = Field(None, alias="ideaId")
    report_data: Optional[dict[str, Any]] = Field(None, alias="reportData")
    idea_data: Optional[dict[str, Any]] = Field(None, alias="ideaData")
    expiry_days: Optional[int] = Field(None, alias="expiryDays", ge=1)


# ============================================================================
# System logs
# ============================================================================


class SystemLogRequest(BaseModel):
    """Body of POST /api/system-logs."""

    operation: Optional[str] = None
    status: Optional[str] = None
    message: Optional[str] = None
    error_details: Optional[Any] = None
    metadata: Optional[dict[str, Any]] = None
