import logging
from typing import Any

from sqlalchemy.orm import Session

from app.repos.resume_repo import create as create_analysis
from app.services.llm_client import is_llm_enabled, llm_analyze_resume
from app.services.user_context import get_user_context

logger = logging.getLogger(__name__)


def _marketability_score(analysis: dict[str, Any]) -> float | None:
    overall = analysis.get("overall_assessment")
    if not isinstance(overall, dict):
        return None
    try:
        return float(overall.get("marketability_score"))
    except (TypeError, ValueError):
        return None


def build_analysis_response(analysis: dict[str, Any]) -> dict[str, Any]:
    """Legacy top-level fields (score, strengths, improvements, recommendations) plus the full analysis."""
    overall = analysis.get("overall_assessment") if isinstance(analysis.get("overall_assessment"), dict) else {}
    return {
        "score": overall.get("marketability_score"),
        "strengths": overall.get("strengths") or [],
        "improvements": overall.get("improvement_areas") or [],
        "recommendations": overall.get("strategic_recommendations") or [],
        **analysis,
    }


def analyze_resume(
    db: Session,
    user_id: str,
    resume_text: str,
    *,
    target_role: str | None = None,
    career_stage: str | None = None,
    industry_focus: str | None = None,
    file_name: str | None = None,
) -> dict[str, Any]:
    """
    Run the skills analysis for a resume and store it.
    Missing role/stage/industry come from the user's career objectives.
    Raises when the model is unavailable or its reply has no parseable JSON object.
    """
    objectives = get_user_context(db, user_id).get("objectives") or {}
    target_role = target_role or objectives.get("target_role")
    career_stage = career_stage or objectives.get("career_stage")
    industry_focus = industry_focus or objectives.get("target_industry")

    if not is_llm_enabled():
        raise RuntimeError("LLM is disabled")
    analysis = llm_analyze_resume(resume_text, target_role, career_stage, industry_focus)
    response = build_analysis_response(analysis)

    try:
        record = create_analysis(
            db,
            user_id,
            resume_text,
            response,
            marketability_score=_marketability_score(analysis),
            file_name=file_name,
            target_role=target_role,
            career_stage=career_stage,
            industry_focus=industry_focus,
        )
        logger.info("Resume analysis saved for user %s (id=%s)", user_id, record.id)
    except Exception as e:
        db.rollback()
        logger.error("Failed to save resume analysis for user %s: %s", user_id, e)
    return response
