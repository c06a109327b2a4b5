from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.job_interaction import JobInteraction
from app.core.security import generate_id


def get_existing(db: Session, user_id: str, job_id: str, interaction_type: str) -> JobInteraction | None:
    return (
        db.query(JobInteraction)
        .filter(
            JobInteraction.user_id == user_id,
            JobInteraction.job_id == job_id,
            JobInteraction.interaction_type == interaction_type,
        )
        .first()
    )


def create(
    db: Session,
    user_id: str,
    job_id: str,
    job_data: dict,
    interaction_type: str,
    notes: str | None = None,
    ai_match_score: float | None = None,
    match_analysis: dict | None = None,
) -> JobInteraction:
    interaction = JobInteraction(
        id=generate_id(),
        user_id=user_id,
        job_id=job_id,
        job_data=job_data,
        interaction_type=interaction_type,
        notes=notes,
        ai_match_score=ai_match_score,
        match_analysis=match_analysis,
    )
    db.add(interaction)
    db.commit()
    db.refresh(interaction)
    return interaction


def update_for_job(
    db: Session,
    user_id: str,
    job_id: str,
    *,
    interaction_type: str | None = None,
    notes: str | None = None,
    set_notes: bool = False,
) -> list[JobInteraction]:
    """
    Update the user's interactions on a job. Returns the updated rows (empty if none).
    A type change moves only the newest row so one job never holds two rows of the same type;
    a notes-only update touches every row.
    """
    rows = (
        db.query(JobInteraction)
        .filter(JobInteraction.user_id == user_id, JobInteraction.job_id == job_id)
        .order_by(JobInteraction.created_at.desc())
        .all()
    )
    if not rows:
        return []
    if interaction_type is not None:
        rows = rows[:1]
    for row in rows:
        if interaction_type is not None:
            row.interaction_type = interaction_type
        if set_notes:
            row.notes = notes
    db.commit()
    for row in rows:
        db.refresh(row)
    return rows


def delete_for_job(db: Session, user_id: str, job_id: str, interaction_type: str | None = None) -> int:
    q = db.query(JobInteraction).filter(JobInteraction.user_id == user_id, JobInteraction.job_id == job_id)
    if interaction_type:
        q = q.filter(JobInteraction.interaction_type == interaction_type)
    count = q.delete(synchronize_session=False)
    db.commit()
    return count


def list_for_user(
    db: Session,
    user_id: str,
    interaction_type: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[JobInteraction], int]:
    """List interactions newest first. Returns (items, total matching the filter)."""
    q = db.query(JobInteraction).filter(JobInteraction.user_id == user_id)
    if interaction_type:
        q = q.filter(JobInteraction.interaction_type == interaction_type)
    total = q.count()
    items = q.order_by(JobInteraction.created_at.desc()).offset(offset).limit(limit).all()
    return items, total


def count_by_type(db: Session, user_id: str) -> dict[str, int]:
    rows = (
        db.query(JobInteraction.interaction_type, func.count(JobInteraction.id))
        .filter(JobInteraction.user_id == user_id)
        .group_by(JobInteraction.interaction_type)
        .all()
    )
    return {interaction_type: count for interaction_type, count in rows}


def get_types_for_jobs(db: Session, user_id: str, job_ids: list[str]) -> dict[str, set[str]]:
    """Map job_id -> set of interaction types the user has recorded for it."""
    if not job_ids:
        return {}
    rows = (
        db.query(JobInteraction.job_id, JobInteraction.interaction_type)
        .filter(JobInteraction.user_id == user_id, JobInteraction.job_id.in_(job_ids))
        .all()
    )
    out: dict[str, set[str]] = {}
    for job_id, interaction_type in rows:
        out.setdefault(job_id, set()).add(interaction_type)
    return out
