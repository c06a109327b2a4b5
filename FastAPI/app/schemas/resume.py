from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.schemas.profile import CareerStage


class ResumeAnalyzeRequest(BaseModel):
    resume_text: str = Field(min_length=50, max_length=50000)
    target_role: str | None = Field(default=None, max_length=100)
    career_stage: CareerStage | None = None
    industry_focus: str | None = Field(default=None, max_length=100)
    file_name: str | None = Field(default=None, max_length=255)


class ExtractedTextResponse(BaseModel):
    text: str
    file_name: str


class ResumeAnalysisResponse(BaseModel):
    id: str
    user_id: str
    file_name: str | None = None
    analysis_data: dict[str, Any]
    marketability_score: float | None = None
    target_role: str | None = None
    career_stage: str | None = None
    industry_focus: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True
