from typing import Any

from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.career_objectives import CareerObjectives
from app.models.user_profile import UserProfile


def get_profile(db: Session, user_id: str) -> UserProfile | None:
    return db.query(UserProfile).filter(UserProfile.user_id == user_id).first()


def get_objectives(db: Session, user_id: str) -> CareerObjectives | None:
    return db.query(CareerObjectives).filter(CareerObjectives.user_id == user_id).first()


def upsert_profile(db: Session, user_id: str, fields: dict[str, Any]) -> UserProfile:
    profile = get_profile(db, user_id)
    if not profile:
        profile = UserProfile(user_id=user_id)
        db.add(profile)
    for key, value in fields.items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def upsert_objectives(db: Session, user_id: str, fields: dict[str, Any]) -> CareerObjectives:
    objectives = get_objectives(db, user_id)
    if not objectives:
        objectives = CareerObjectives(id=generate_id(), user_id=user_id)
        db.add(objectives)
    for key, value in fields.items():
        setattr(objectives, key, value)
    db.commit()
    db.refresh(objectives)
    return objectives
