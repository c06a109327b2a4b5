import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_active_user
from app.models.user import User
from app.repos.profile_repo import get_objectives, get_profile, upsert_objectives, upsert_profile
from app.schemas.profile import (
    ObjectivesResponse,
    ObjectivesUpdate,
    ProfileBundle,
    ProfileResponse,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileBundle)
def read_profile(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    profile = get_profile(db, user.id)
    objectives = get_objectives(db, user.id)
    return ProfileBundle(
        profile=ProfileResponse.model_validate(profile) if profile else None,
        objectives=ObjectivesResponse.model_validate(objectives) if objectives else None,
    )


@router.put("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    try:
        profile = upsert_profile(db, user.id, data.model_dump())
        logger.info("Profile saved for user %s", user.id)
        return profile
    except Exception as e:
        logger.exception("Failed saving profile for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save profile") from e


@router.put("/objectives", response_model=ObjectivesResponse)
def update_objectives(
    data: ObjectivesUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    try:
        objectives = upsert_objectives(db, user.id, data.model_dump())
        logger.info("Career objectives saved for user %s", user.id)
        return objectives
    except Exception as e:
        logger.exception("Failed saving objectives for user=%s: %s", user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save career objectives"
        ) from e
