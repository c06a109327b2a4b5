from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

CareerStage = Literal["entry", "mid", "senior", "executive"]
PrimaryGoal = Literal["job_search", "skill_development", "career_change", "promotion"]
Timeline = Literal["immediate", "short", "medium", "long"]
WorkPreference = Literal["remote", "hybrid", "onsite", "flexible"]


class ProfileUpdate(BaseModel):
    full_name: str = Field(min_length=1, max_length=100)
    current_role: str = Field(min_length=1, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    bio: str | None = Field(default=None, max_length=500)
    years_experience: int | None = Field(default=None, ge=0, le=50)

    @field_validator("linkedin_url", "github_url", "portfolio_url")
    @classmethod
    def url_or_empty(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        v = v.strip()
        if not v.lower().startswith(("http://", "https://")) or "." not in v:
            raise ValueError("Invalid URL")
        return v


class ProfileResponse(BaseModel):
    user_id: str
    full_name: str | None = None
    current_role: str | None = None
    location: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None
    bio: str | None = None
    years_experience: int | None = None

    class Config:
        from_attributes = True


class ObjectivesUpdate(BaseModel):
    target_role: str = Field(min_length=1, max_length=100)
    target_industry: str | None = Field(default=None, max_length=100)
    career_stage: CareerStage
    primary_goal: PrimaryGoal
    timeline: Timeline
    work_preference: WorkPreference
    current_situation: str | None = Field(default=None, max_length=1000)
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    salary_currency: str = Field(default="USD", min_length=3, max_length=3)

    @model_validator(mode="after")
    def salary_range_valid(self):
        if self.salary_min is not None and self.salary_max is not None and self.salary_min > self.salary_max:
            raise ValueError("salary_min must not exceed salary_max")
        return self


class ObjectivesResponse(BaseModel):
    id: str
    user_id: str
    target_role: str | None = None
    target_industry: str | None = None
    career_stage: str | None = None
    primary_goal: str | None = None
    timeline: str | None = None
    work_preference: str | None = None
    current_situation: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    salary_currency: str | None = None

    class Config:
        from_attributes = True


class ProfileBundle(BaseModel):
    profile: ProfileResponse | None = None
    objectives: ObjectivesResponse | None = None
