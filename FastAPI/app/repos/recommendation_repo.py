from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.career_recommendation import CareerRecommendation


def create(
    db: Session,
    user_id: str,
    recommendation_data: dict,
    recommendation_type: str = "general",
    priority: int = 1,
) -> CareerRecommendation:
    rec = CareerRecommendation(
        id=generate_id(),
        user_id=user_id,
        recommendation_type=recommendation_type,
        recommendation_data=recommendation_data,
        priority=priority,
        status="active",
    )
    db.add(rec)
    db.commit()
    db.refresh(rec)
    return rec


def list_for_user(db: Session, user_id: str, status: str | None = "active", limit: int = 20) -> list[CareerRecommendation]:
    q = db.query(CareerRecommendation).filter(CareerRecommendation.user_id == user_id)
    if status:
        q = q.filter(CareerRecommendation.status == status)
    return (
        q.order_by(CareerRecommendation.created_at.desc())
        .limit(limit)
        .all()
    )


def update_status(db: Session, rec_id: str, user_id: str, status: str) -> CareerRecommendation | None:
    rec = (
        db.query(CareerRecommendation)
        .filter(CareerRecommendation.id == rec_id, CareerRecommendation.user_id == user_id)
        .first()
    )
    if not rec:
        return None
    rec.status = status
    db.commit()
    db.refresh(rec)
    return rec
