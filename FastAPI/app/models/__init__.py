from app.models.user import User
from app.models.user_profile import UserProfile
from app.models.career_objectives import CareerObjectives
from app.models.resume_analysis import ResumeAnalysis
from app.models.job_interaction import JobInteraction
from app.models.job_search_session import JobSearchSession
from app.models.career_recommendation import CareerRecommendation

__all__ = [
    "User",
    "UserProfile",
    "CareerObjectives",
    "ResumeAnalysis",
    "JobInteraction",
    "JobSearchSession",
    "CareerRecommendation",
]
