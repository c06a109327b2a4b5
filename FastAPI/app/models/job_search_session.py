from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class JobSearchSession(Base):
    """Write-only log of a search request and its result count."""

    __tablename__ = "job_search_sessions"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    search_query = Column(Text)
    filters = Column(JSONB)
    results_count = Column(Integer, default=0)
    job_ids = Column(JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), index=True)

    user = relationship("User", back_populates="search_sessions")
