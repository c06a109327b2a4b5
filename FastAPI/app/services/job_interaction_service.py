import logging
from typing import Any

from sqlalchemy.orm import Session

from app.models.job_interaction import JobInteraction
from app.repos.job_interaction_repo import count_by_type
from app.services.llm_client import is_llm_enabled, llm_job_match_analysis
from app.services.user_context import get_user_context

logger = logging.getLogger(__name__)


def analyze_saved_job(db: Session, user_id: str, job_data: dict[str, Any]) -> dict[str, Any] | None:
    """
    Fit analysis for a job the user just saved.
    None when the user has no career objectives, the model is off, or the call fails.
    """
    context = get_user_context(db, user_id)
    if not context.get("objectives") or not is_llm_enabled():
        return None
    try:
        return llm_job_match_analysis(job_data, context)
    except Exception as e:
        logger.warning("Job match analysis failed for user %s: %s", user_id, e)
        return None


def match_score_of(analysis: dict[str, Any] | None) -> float | None:
    if not analysis:
        return None
    try:
        return float(analysis.get("match_score"))
    except (TypeError, ValueError):
        return None


def analysis_body_of(analysis: dict[str, Any] | None) -> dict[str, Any] | None:
    """The stored part of a match analysis: the inner "analysis" object only."""
    if not analysis:
        return None
    body = analysis.get("analysis")
    return body if isinstance(body, dict) else None


def interaction_summary(db: Session, user_id: str) -> dict[str, int]:
    summary = {
        "total_interactions": 0,
        "saved_jobs": 0,
        "applied_jobs": 0,
        "viewed_jobs": 0,
        "dismissed_jobs": 0,
    }
    try:
        counts = count_by_type(db, user_id)
    except Exception as e:
        logger.warning("Interaction summary failed for user %s: %s", user_id, e)
        return summary
    summary["total_interactions"] = sum(counts.values())
    for interaction_type in ("saved", "applied", "viewed", "dismissed"):
        summary[f"{interaction_type}_jobs"] = counts.get(interaction_type, 0)
    return summary


def serialize_interaction(row: JobInteraction, include_ai_analysis: bool = True) -> dict[str, Any]:
    out = {
        "id": row.id,
        "job_id": row.job_id,
        "job_data": row.job_data or {},
        "interaction_type": row.interaction_type,
        "notes": row.notes,
        "created_at": row.created_at.isoformat() if row.created_at else None,
        "updated_at": row.updated_at.isoformat() if row.updated_at else None,
    }
    if include_ai_analysis:
        out["ai_match_score"] = row.ai_match_score
        out["match_analysis"] = row.match_analysis
    return out
