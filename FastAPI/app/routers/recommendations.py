import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_active_user
from app.models.user import User
from app.repos.recommendation_repo import list_for_user, update_status
from app.schemas.recommendation import (
    GeneratedRecommendations,
    RecommendationOut,
    RecommendationRequest,
    RecommendationStatusUpdate,
)
from app.services.recommendation_service import MissingCareerGoals, generate_recommendations

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.post("/generate", response_model=GeneratedRecommendations)
def generate(
    data: RecommendationRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    try:
        return generate_recommendations(db, user.id, data.career_goals, data.profile)
    except MissingCareerGoals:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Career goals are required. Set your career objectives first.",
        )
    except Exception as e:
        logger.exception("Recommendation generation failed for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate recommendations"
        ) from e


@router.get("", response_model=list[RecommendationOut])
def list_recommendations(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    return list_for_user(db, user.id)


@router.patch("/{rec_id}", response_model=RecommendationOut)
def set_recommendation_status(
    rec_id: str,
    data: RecommendationStatusUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    rec = update_status(db, rec_id, user.id, data.status)
    if not rec:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recommendation not found")
    logger.info("Recommendation %s marked %s by user %s", rec_id, data.status, user.id)
    return rec
