from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class RecommendationRequest(BaseModel):
    """Goals/profile sent by the client; anything omitted is read from the stored profile."""

    career_goals: dict[str, Any] | None = None
    profile: dict[str, Any] | None = None


class RecommendationStatusUpdate(BaseModel):
    status: Literal["active", "completed", "dismissed"]


class RecommendationOut(BaseModel):
    id: str
    recommendation_type: str | None = None
    recommendation_data: dict[str, Any]
    priority: int | None = None
    status: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class GeneratedRecommendations(BaseModel):
    recommendations: list[str] = Field(default_factory=list)
    id: str | None = None
