from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    auth_jwt_secret: str
    auth_jwt_algorithm: str = "HS256"
    auth_jwt_audience: str = "authenticated"  # empty string disables the audience check
    app_env: str = "development"  # development, staging, production

    # Bedrock LLM for resume analysis, job scoring and recommendations
    bedrock_llm_model_id: str = "mistral.ministral-3-8b-instruct"
    bedrock_llm_enabled: bool = True
    aws_region: str = "us-west-2"

    # CORS origins as comma-separated values
    # Example: "https://app.example.com,https://admin.example.com"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Job search providers (a provider without credentials is skipped)
    adzuna_base_url: str = "https://api.adzuna.com/v1/api/jobs"
    adzuna_app_id: str = ""
    adzuna_app_key: str = ""
    jsearch_api_key: str = ""
    jsearch_host: str = "jsearch.p.rapidapi.com"
    jobspy_enabled: bool = False
    job_site_names: str = "indeed,linkedin,zip_recruiter,google"
    job_country_indeed: str = "USA"
    job_provider_timeout_seconds: float = 15.0

    # Process-local search cache and search session retention
    job_search_cache_ttl_seconds: int = 300
    search_session_ttl_hours: int = 24

    # Upload and request guards
    max_resume_upload_mb: int = 10
    rate_limit_ai_per_min: int = 10
    rate_limit_search_per_min: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
