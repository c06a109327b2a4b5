from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base

INTERACTION_TYPES = ("viewed", "saved", "applied", "dismissed")


class JobInteraction(Base):
    """A user's action on an external job. One row per (user, job_id, interaction_type)."""

    __tablename__ = "job_interactions"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(String, nullable=False, index=True)
    job_data = Column(JSONB, nullable=False)
    interaction_type = Column(String, nullable=False)
    notes = Column(Text)
    ai_match_score = Column(Float)
    match_analysis = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="job_interactions")
