import logging
from typing import Any

from sqlalchemy.orm import Session

from app.repos.profile_repo import get_objectives, get_profile

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "full_name", "current_role", "location", "linkedin_url", "github_url",
    "portfolio_url", "bio", "years_experience",
)
OBJECTIVE_FIELDS = (
    "target_role", "target_industry", "career_stage", "primary_goal", "timeline",
    "work_preference", "current_situation", "salary_min", "salary_max", "salary_currency",
)


def _row_to_dict(row: Any, fields: tuple[str, ...]) -> dict[str, Any] | None:
    if row is None:
        return None
    return {f: getattr(row, f, None) for f in fields}


def get_user_context(db: Session, user_id: str) -> dict[str, Any]:
    """
    The user's profile and career objectives as plain dicts, for prompts.
    Lookup failures degrade to {"profile": None, "objectives": None}.
    """
    try:
        return {
            "profile": _row_to_dict(get_profile(db, user_id), PROFILE_FIELDS),
            "objectives": _row_to_dict(get_objectives(db, user_id), OBJECTIVE_FIELDS),
        }
    except Exception as e:
        logger.warning("Could not load user context for %s: %s", user_id, e)
        return {"profile": None, "objectives": None}
