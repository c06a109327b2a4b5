"""
Job board providers. Each fetcher takes the search filters dict and returns jobs in the
common shape: id, source, title, company, location, description, salary_min,
salary_max, contract_type, contract_time, category, created, url.
"""
import logging
import re
from typing import Any, Callable

import httpx
import pandas as pd

from app.config import settings

try:
    from jobspy import scrape_jobs
except ImportError:
    scrape_jobs = None

logger = logging.getLogger(__name__)

USER_AGENT = "CareerCoach-JobSearch/1.0"

_UK_POSTCODE = re.compile(r"^[a-z]{1,2}[0-9][a-z0-9]?\s?[0-9][a-z]{2}$", re.IGNORECASE)
_US_ZIP = re.compile(r"^\d{5}(-\d{4})?$")
_CA_POSTCODE = re.compile(r"^[a-z]\d[a-z]\s?\d[a-z]\d$", re.IGNORECASE)

# Checked in order; first country with a matching keyword wins.
COUNTRY_KEYWORDS: list[tuple[str, list[str]]] = [
    (
        "gb",
        [
            "uk", "britain", "england", "scotland", "wales", "northern ireland",
            "london", "manchester", "birmingham", "glasgow", "liverpool", "edinburgh",
            "bristol", "leeds", "cardiff", "belfast", "sheffield", "newcastle",
            "midlands", "yorkshire", "lancashire", "kent", "surrey", "devon",
        ],
    ),
    ("ca", ["canada", "toronto", "vancouver", "montreal", "calgary", "ottawa", "quebec"]),
    ("au", ["australia", "sydney", "melbourne", "brisbane", "perth", "adelaide", "canberra"]),
]
EUROPEAN_INDICATORS = [".co.uk", ".uk", "£", "pounds", "pence", "quid"]


def detect_country(location: str | None) -> str:
    """Adzuna country code for a free-text location. Defaults to "us"."""
    if not location or not location.strip():
        return "us"
    loc = location.lower()
    stripped = loc.strip()

    if _UK_POSTCODE.match(stripped):
        return "gb"
    if _US_ZIP.match(stripped):
        return "us"
    if _CA_POSTCODE.match(stripped):
        return "ca"

    country = "us"
    for code, keywords in COUNTRY_KEYWORDS:
        if any(k in loc for k in keywords):
            country = code
            break
    if country == "us" and any(ind in loc for ind in EUROPEAN_INDICATORS):
        country = "gb"
    return country


def _clean(value: Any) -> Any:
    """None for pandas NaN/NaT and empty strings."""
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _to_float(value: Any) -> float | None:
    value = _clean(value)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _adzuna_enabled() -> bool:
    return bool(settings.adzuna_app_id and settings.adzuna_app_key)


def fetch_adzuna_jobs(filters: dict[str, Any]) -> list[dict[str, Any]]:
    country = detect_country(filters.get("location"))
    page = filters.get("page") or 1
    per_page = min(filters.get("per_page") or 20, 50)
    url = f"{settings.adzuna_base_url.rstrip('/')}/{country}/search/{page}"
    params: dict[str, Any] = {
        "app_id": settings.adzuna_app_id,
        "app_key": settings.adzuna_app_key,
        "results_per_page": per_page,
        "content-type": "application/json",
    }
    if filters.get("query"):
        params["what"] = filters["query"]
    if filters.get("location"):
        params["where"] = filters["location"]
    if filters.get("salary_min"):
        params["salary_min"] = filters["salary_min"]
    if filters.get("salary_max"):
        params["salary_max"] = filters["salary_max"]
    employment_type = filters.get("employment_type")
    if employment_type in ("full_time", "part_time", "contract"):
        params[employment_type] = 1
    params["sort_by"] = "relevance"

    logger.info("Adzuna search: country=%s location=%r page=%s", country, filters.get("location"), page)
    resp = httpx.get(
        url,
        params=params,
        headers={"User-Agent": USER_AGENT},
        timeout=settings.job_provider_timeout_seconds,
    )
    if resp.status_code >= 400:
        raise RuntimeError(f"Adzuna API error: {resp.status_code} - {resp.text[:200]}")
    data = resp.json() or {}

    jobs = []
    for r in data.get("results") or []:
        jobs.append({
            "id": f"adzuna:{r.get('id')}",
            "source": "adzuna",
            "title": r.get("title") or "Unknown Title",
            "company": (r.get("company") or {}).get("display_name") or "Unknown Company",
            "location": (r.get("location") or {}).get("display_name"),
            "description": r.get("description"),
            "salary_min": _to_float(r.get("salary_min")),
            "salary_max": _to_float(r.get("salary_max")),
            "contract_type": r.get("contract_type"),
            "contract_time": r.get("contract_time"),
            "category": (r.get("category") or {}).get("label"),
            "created": r.get("created"),
            "url": r.get("redirect_url"),
        })
    return jobs


_JSEARCH_EMPLOYMENT = {"full_time": "FULLTIME", "part_time": "PARTTIME", "contract": "CONTRACTOR"}


def _jsearch_enabled() -> bool:
    return bool(settings.jsearch_api_key)


def fetch_jsearch_jobs(filters: dict[str, Any]) -> list[dict[str, Any]]:
    query = filters.get("query") or "jobs"
    if filters.get("location"):
        query = f"{query} in {filters['location']}"
    params: dict[str, Any] = {"query": query, "page": filters.get("page") or 1, "num_pages": 1}
    if filters.get("remote"):
        params["remote_jobs_only"] = "true"
    if filters.get("employment_type") in _JSEARCH_EMPLOYMENT:
        params["employment_types"] = _JSEARCH_EMPLOYMENT[filters["employment_type"]]

    resp = httpx.get(
        f"https://{settings.jsearch_host}/search",
        params=params,
        headers={
            "X-RapidAPI-Key": settings.jsearch_api_key,
            "X-RapidAPI-Host": settings.jsearch_host,
            "User-Agent": USER_AGENT,
        },
        timeout=settings.job_provider_timeout_seconds,
    )
    if resp.status_code >= 400:
        raise RuntimeError(f"JSearch API error: {resp.status_code} - {resp.text[:200]}")
    data = resp.json() or {}

    jobs = []
    for r in data.get("data") or []:
        place = ", ".join(p for p in (r.get("job_city"), r.get("job_state"), r.get("job_country")) if p)
        if r.get("job_is_remote") and not place:
            place = "Remote"
        jobs.append({
            "id": f"jsearch:{r.get('job_id')}",
            "source": "jsearch",
            "title": r.get("job_title") or "Unknown Title",
            "company": r.get("employer_name") or "Unknown Company",
            "location": place or None,
            "description": r.get("job_description"),
            "salary_min": _to_float(r.get("job_min_salary")),
            "salary_max": _to_float(r.get("job_max_salary")),
            "contract_type": None,
            "contract_time": (r.get("job_employment_type") or "").lower() or None,
            "category": None,
            "created": r.get("job_posted_at_datetime_utc"),
            "url": r.get("job_apply_link"),
        })
    return jobs


_JOBSPY_JOB_TYPE = {"full_time": "fulltime", "part_time": "parttime", "contract": "contract"}


def _site_names_from_settings() -> list[str]:
    raw = settings.job_site_names or ""
    names = [s.strip() for s in raw.split(",") if s.strip()]
    return names or ["indeed", "linkedin", "zip_recruiter", "google"]


def _jobspy_enabled() -> bool:
    return bool(settings.jobspy_enabled)


def fetch_jobspy_jobs(filters: dict[str, Any]) -> list[dict[str, Any]]:
    if scrape_jobs is None:
        raise RuntimeError("jobspy is not installed. pip install python-jobspy")

    kwargs: dict[str, Any] = {
        "site_name": _site_names_from_settings(),
        "search_term": filters.get("query") or "",
        "location": filters.get("location") or "",
        "results_wanted": filters.get("per_page") or 20,
        "country_indeed": settings.job_country_indeed,
    }
    if filters.get("remote"):
        kwargs["is_remote"] = True
    if filters.get("employment_type") in _JOBSPY_JOB_TYPE:
        kwargs["job_type"] = _JOBSPY_JOB_TYPE[filters["employment_type"]]

    try:
        df = scrape_jobs(**kwargs)
    except Exception as e:
        logger.exception("Scraping error")
        raise RuntimeError(f"Scraping error: {e}") from e
    if df is None or df.empty:
        return []

    df = df.copy()
    df.columns = [str(c).lower() for c in df.columns]
    if "company_name" in df.columns and "company" not in df.columns:
        df["company"] = df["company_name"]
    if "description" not in df.columns:
        df["description"] = df["job_description"] if "job_description" in df.columns else ""
    df["company"] = df["company"].fillna("Unknown Company")
    df["title"] = df["title"].fillna("Unknown Title")

    jobs = []
    for _, r in df.iterrows():
        job_url = _clean(r.get("job_url"))
        raw_id = _clean(r.get("id")) or job_url
        if not raw_id:
            continue
        posted = _clean(r.get("date_posted"))
        jobs.append({
            "id": f"jobspy:{raw_id}",
            "source": "jobspy",
            "title": str(r.get("title")),
            "company": str(r.get("company")),
            "location": _clean(r.get("location")),
            "description": _clean(r.get("description")),
            "salary_min": _to_float(r.get("min_amount")),
            "salary_max": _to_float(r.get("max_amount")),
            "contract_type": None,
            "contract_time": _clean(r.get("job_type")),
            "category": None,
            "created": str(posted) if posted is not None else None,
            "url": job_url,
        })
    return jobs


Fetcher = Callable[[dict[str, Any]], list[dict[str, Any]]]

# Provider order is also the order results are concatenated in before dedup.
PROVIDERS: list[tuple[str, Callable[[], bool], Fetcher]] = [
    ("adzuna", _adzuna_enabled, fetch_adzuna_jobs),
    ("jsearch", _jsearch_enabled, fetch_jsearch_jobs),
    ("jobspy", _jobspy_enabled, fetch_jobspy_jobs),
]


def enabled_providers() -> list[tuple[str, Fetcher]]:
    return [(name, fetch) for name, is_enabled, fetch in PROVIDERS if is_enabled()]
