import logging
from typing import Any

from sqlalchemy.orm import Session

from app.repos.recommendation_repo import create as create_recommendation
from app.services.llm_client import is_llm_enabled, llm_generate_recommendations
from app.services.user_context import get_user_context

logger = logging.getLogger(__name__)


class MissingCareerGoals(Exception):
    """Raised when neither the request nor the stored objectives carry career goals."""


def generate_recommendations(
    db: Session,
    user_id: str,
    career_goals: dict[str, Any] | None = None,
    profile: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Generate and store recommendations. Returns {"recommendations": [...], "id": str | None};
    id is None when the row could not be stored.
    """
    if not career_goals or not profile:
        context = get_user_context(db, user_id)
        career_goals = career_goals or context.get("objectives")
        profile = profile or context.get("profile")
    if not career_goals:
        raise MissingCareerGoals()

    if not is_llm_enabled():
        raise RuntimeError("LLM is disabled")
    recommendations = llm_generate_recommendations(career_goals, profile)

    rec_id = None
    try:
        row = create_recommendation(
            db,
            user_id,
            {"recommendations": recommendations, "career_goals": career_goals},
        )
        rec_id = row.id
        logger.info("Stored %d recommendations for user %s", len(recommendations), user_id)
    except Exception as e:
        db.rollback()
        logger.error("Failed to store recommendations for user %s: %s", user_id, e)
    return {"recommendations": recommendations, "id": rec_id}
