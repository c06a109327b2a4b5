from sqlalchemy import Column, String, Integer, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base

RECOMMENDATION_STATUSES = ("active", "completed", "dismissed")


class CareerRecommendation(Base):
    __tablename__ = "career_recommendations"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recommendation_type = Column(String, default="general")
    recommendation_data = Column(JSONB, nullable=False)
    priority = Column(Integer, default=1)  # 1 (highest) to 5 (lowest)
    status = Column(String, default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="recommendations")
