"""Pydantic schemas for ideas and idea generation."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["easy", "medium", "hard"]
IdeaStatus = Literal["saved", "in_progress", "completed", "archived"]


class StructuredIdeaInput(BaseModel):
    """Form fields of a structured generation request."""

    model_config = ConfigDict(extra="allow")

    category: Optional[str] = None
    difficulty: Optional[str] = None
    targetAudience: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    interests: Optional[str] = None


class GenerateIdeaRequest(BaseModel):
    """Body of POST /api/generate-idea."""

    type: Optional[str] = Field(None, description="structured or freeform")
    data: Optional[StructuredIdeaInput] = None
    prompt: Optional[str] = None
    multiple: bool = False
    count: int = 1


class SaveIdeaRequest(BaseModel):
    """Body of POST /api/save-idea."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    target_audience: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    generated: bool = False
    source_data: Optional[dict[str, Any]] = None


class IdeaUpdateRequest(BaseModel):
    """Body of PATCH /api/ideas/{id}."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    target_audience: Optional[str] = None
    tags: Optional[list[str]] = None
    status: Optional[IdeaStatus] = None
