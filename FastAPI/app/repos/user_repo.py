import logging

from sqlalchemy.orm import Session

from app.models.user import User

logger = logging.getLogger(__name__)


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, user_id: str, email: str | None = None) -> User:
    user = User(
        id=user_id,
        email=email,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_or_create(db: Session, user_id: str, email: str | None = None) -> User:
    """Fetch the local row for an auth subject, creating it on first sight."""
    user = get_by_id(db, user_id)
    if user:
        if email and user.email != email:
            user.email = email
            db.commit()
            db.refresh(user)
        return user
    logger.info("Provisioning local user row for %s", user_id)
    return create(db, user_id, email)
