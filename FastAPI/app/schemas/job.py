from typing import Any, Literal

from pydantic import BaseModel, Field

InteractionType = Literal["viewed", "saved", "applied", "dismissed"]


class JobSearchFilters(BaseModel):
    query: str | None = Field(default=None, max_length=200)
    location: str | None = Field(default=None, max_length=100)
    salary_min: int | None = Field(default=None, ge=0)
    salary_max: int | None = Field(default=None, ge=0)
    remote: bool | None = None
    employment_type: Literal["full_time", "part_time", "contract"] | None = None
    experience_level: Literal["entry", "mid", "senior"] | None = None
    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=20, ge=1, le=100)


class JobSearchRequest(BaseModel):
    filters: JobSearchFilters = Field(default_factory=JobSearchFilters)
    generate_ai_matching: bool = True
    save_search_session: bool = True


class JobResult(BaseModel):
    """Common job shape every provider is translated into."""

    id: str
    source: str
    title: str
    company: str
    location: str | None = None
    description: str | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    contract_type: str | None = None
    contract_time: str | None = None
    category: str | None = None
    created: str | None = None
    url: str | None = None
    salary_formatted: str | None = None
    location_type: Literal["remote", "hybrid", "onsite"] | None = None
    experience_level: str | None = None
    ai_match_score: float | None = None
    match_reasons: list[str] = Field(default_factory=list)
    is_saved: bool = False
    is_viewed: bool = False


class JobSearchResponse(BaseModel):
    jobs: list[JobResult]
    total_results: int
    message: str | None = None
    search_metadata: dict[str, Any] | None = None


class JobInteractionRequest(BaseModel):
    action: str | None = None  # create | update | delete | list
    job_id: str | None = Field(default=None, min_length=1)
    job_data: dict[str, Any] | None = None
    interaction_type: InteractionType | None = None
    notes: str | None = Field(default=None, max_length=5000)
    generate_ai_analysis: bool = False
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)
    include_ai_analysis: bool = False
