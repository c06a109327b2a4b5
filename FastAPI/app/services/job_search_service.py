import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

import pandas as pd
from sqlalchemy.orm import Session

from app.config import settings
from app.core.search_cache import SearchResultCache, make_cache_key
from app.repos import job_interaction_repo, search_session_repo
from app.services.job_providers import enabled_providers
from app.services.job_scoring import score_jobs
from app.services.user_context import get_user_context

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No jobs found matching your criteria"

search_cache = SearchResultCache(ttl_seconds=settings.job_search_cache_ttl_seconds)


def deduplicate_jobs(jobs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Drop jobs whose lowercased, stripped (title, company) was already seen. First occurrence wins."""
    if not jobs:
        return []
    df = pd.DataFrame(
        {
            "title_clean": [str(j.get("title") or "").lower().strip() for j in jobs],
            "company_clean": [str(j.get("company") or "").lower().strip() for j in jobs],
        }
    )
    kept = df.drop_duplicates(subset=["title_clean", "company_clean"], keep="first").index
    return [jobs[i] for i in kept]


def _fetch_from_provider(name: str, fetch, filters: dict[str, Any]) -> list[dict[str, Any]] | None:
    """Called in worker thread. None means the provider failed."""
    try:
        return fetch(filters) or []
    except Exception as e:
        logger.warning("Job provider %s failed: %s", name, e)
        return None


def search_jobs(filters: dict[str, Any]) -> tuple[list[dict[str, Any]], list[str], bool]:
    """
    Query every enabled provider in parallel and merge the results.
    Returns (jobs, sources, cached). Results are cached per filter set for the configured TTL
    unless every provider failed.
    """
    key = make_cache_key(filters)
    hit = search_cache.get(key)
    if hit is not None:
        jobs, sources = hit
        logger.debug("Job search cache hit: %s", key)
        return list(jobs), list(sources), True

    providers = enabled_providers()
    if not providers:
        logger.warning("No job providers are configured")
        return [], [], False

    results: dict[str, list[dict[str, Any]] | None] = {}
    with ThreadPoolExecutor(max_workers=len(providers)) as executor:
        futures = {executor.submit(_fetch_from_provider, name, fetch, filters): name for name, fetch in providers}
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    merged: list[dict[str, Any]] = []
    for name, _ in providers:
        merged.extend(results.get(name) or [])
    jobs = deduplicate_jobs(merged)
    sources = [name for name, _ in providers if results.get(name)]
    logger.info(
        "Job search: providers=%s fetched=%d unique=%d",
        [name for name, _ in providers], len(merged), len(jobs),
    )
    if any(results.get(name) is not None for name, _ in providers):
        search_cache.set(key, (jobs, sources))
    else:
        logger.warning("All job providers failed; result not cached")
    return list(jobs), sources, False


def _format_money(amount: float) -> str:
    return f"${amount:,.0f}"


def enhance_job_metadata(job: dict[str, Any]) -> dict[str, Any]:
    enhanced = dict(job)
    salary_min = job.get("salary_min")
    salary_max = job.get("salary_max")
    if salary_min and salary_max:
        enhanced["salary_formatted"] = f"{_format_money(salary_min)} - {_format_money(salary_max)}"
    elif salary_min:
        enhanced["salary_formatted"] = f"{_format_money(salary_min)}+"
    elif salary_max:
        enhanced["salary_formatted"] = f"Up to {_format_money(salary_max)}"

    description = (job.get("description") or "").lower()
    title = (job.get("title") or "").lower()
    if "remote" in description or "remote" in title:
        enhanced["location_type"] = "remote"
    elif "hybrid" in description:
        enhanced["location_type"] = "hybrid"
    else:
        enhanced["location_type"] = "onsite"

    if any(w in title for w in ("senior", "lead", "principal")):
        enhanced["experience_level"] = "senior"
    elif any(w in title for w in ("junior", "entry", "graduate")):
        enhanced["experience_level"] = "junior"
    else:
        enhanced["experience_level"] = "mid"
    return enhanced


def add_interaction_flags(db: Session, user_id: str, jobs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    try:
        types_by_job = job_interaction_repo.get_types_for_jobs(db, user_id, [j["id"] for j in jobs])
    except Exception as e:
        logger.warning("Could not load interaction flags for %s: %s", user_id, e)
        return jobs
    out = []
    for job in jobs:
        types = types_by_job.get(job["id"], set())
        out.append({**job, "is_saved": "saved" in types, "is_viewed": "viewed" in types})
    return out


def _save_search_session(db: Session, user_id: str, filters: dict[str, Any], jobs: list[dict[str, Any]]) -> None:
    try:
        search_session_repo.create(
            db,
            user_id,
            search_query=filters.get("query"),
            filters=filters,
            results_count=len(jobs),
            job_ids=[j["id"] for j in jobs],
            ttl_hours=settings.search_session_ttl_hours,
        )
    except Exception as e:
        db.rollback()
        logger.warning("Failed to save search session for %s: %s", user_id, e)


def run_job_search(
    db: Session,
    user_id: str,
    filters: dict[str, Any],
    *,
    generate_ai_matching: bool = True,
    save_search_session: bool = True,
) -> dict[str, Any]:
    """Search, annotate and log one job search for a user. Provider failures never raise."""
    jobs, sources, cached = search_jobs(filters)
    metadata = {
        "query": filters.get("query"),
        "location": filters.get("location"),
        "filters_applied": filters,
        "ai_matching_enabled": generate_ai_matching,
        "sources": sources,
        "cached": cached,
    }
    if not jobs:
        return {"jobs": [], "total_results": 0, "message": NO_RESULTS_MESSAGE, "search_metadata": metadata}

    jobs = [enhance_job_metadata(j) for j in jobs]
    if generate_ai_matching:
        jobs = score_jobs(jobs, get_user_context(db, user_id))
    jobs = add_interaction_flags(db, user_id, jobs)

    if save_search_session:
        _save_search_session(db, user_id, filters, jobs)

    return {"jobs": jobs, "total_results": len(jobs), "search_metadata": metadata}
