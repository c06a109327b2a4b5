from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base


class CareerObjectives(Base):
    """Free-form career preferences edited from the profile form."""

    __tablename__ = "career_objectives"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    target_role = Column(String)
    target_industry = Column(String)
    career_stage = Column(String)  # entry | mid | senior | executive
    primary_goal = Column(String)  # job_search | skill_development | career_change | promotion
    timeline = Column(String)  # immediate | short | medium | long
    work_preference = Column(String)  # remote | hybrid | onsite | flexible
    current_situation = Column(Text)
    salary_min = Column(Integer)
    salary_max = Column(Integer)
    salary_currency = Column(String, default="USD")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="objectives")
