from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class User(Base):
    """Local mirror of an identity owned by the hosted auth service."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)  # auth subject id
    email = Column(String, index=True, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    profile = relationship("UserProfile", back_populates="user", uselist=False, passive_deletes=True)
    objectives = relationship("CareerObjectives", back_populates="user", uselist=False, passive_deletes=True)
    resume_analyses = relationship("ResumeAnalysis", back_populates="user", passive_deletes=True)
    job_interactions = relationship("JobInteraction", back_populates="user", passive_deletes=True)
    search_sessions = relationship("JobSearchSession", back_populates="user", passive_deletes=True)
    recommendations = relationship("CareerRecommendation", back_populates="user", passive_deletes=True)
