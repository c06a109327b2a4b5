from sqlalchemy.orm import Session

from app.models.resume_analysis import ResumeAnalysis
from app.core.security import generate_id


def create(
    db: Session,
    user_id: str,
    resume_text: str,
    analysis_data: dict,
    *,
    marketability_score: float | None = None,
    file_name: str | None = None,
    target_role: str | None = None,
    career_stage: str | None = None,
    industry_focus: str | None = None,
) -> ResumeAnalysis:
    record = ResumeAnalysis(
        id=generate_id(),
        user_id=user_id,
        file_name=file_name,
        resume_text=resume_text,
        analysis_data=analysis_data,
        marketability_score=marketability_score,
        target_role=target_role,
        career_stage=career_stage,
        industry_focus=industry_focus,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def get_latest_by_user(db: Session, user_id: str) -> ResumeAnalysis | None:
    return (
        db.query(ResumeAnalysis)
        .filter(ResumeAnalysis.user_id == user_id)
        .order_by(ResumeAnalysis.created_at.desc())
        .first()
    )


def list_for_user(db: Session, user_id: str, limit: int = 20) -> list[ResumeAnalysis]:
    return (
        db.query(ResumeAnalysis)
        .filter(ResumeAnalysis.user_id == user_id)
        .order_by(ResumeAnalysis.created_at.desc())
        .limit(limit)
        .all()
    )
