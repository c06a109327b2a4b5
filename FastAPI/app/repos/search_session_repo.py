import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.job_search_session import JobSearchSession

logger = logging.getLogger(__name__)


def create(
    db: Session,
    user_id: str,
    search_query: str | None,
    filters: dict,
    results_count: int,
    job_ids: list[str],
    ttl_hours: int = 24,
) -> JobSearchSession:
    session_row = JobSearchSession(
        id=generate_id(),
        user_id=user_id,
        search_query=search_query,
        filters=filters,
        results_count=results_count,
        job_ids=job_ids,
        expires_at=datetime.now(timezone.utc) + timedelta(hours=ttl_hours),
    )
    db.add(session_row)
    db.commit()
    return session_row


def count_expired(db: Session) -> int:
    now = datetime.now(timezone.utc)
    return db.query(JobSearchSession).filter(JobSearchSession.expires_at < now).count()


def delete_expired(db: Session) -> int:
    """Delete sessions past their expiry. Returns count deleted."""
    now = datetime.now(timezone.utc)
    count = (
        db.query(JobSearchSession)
        .filter(JobSearchSession.expires_at < now)
        .delete(synchronize_session=False)
    )
    db.commit()
    if count:
        logger.info("Deleted %d expired search sessions", count)
    return count
