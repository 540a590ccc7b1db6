"""SQLAlchemy ORM models."""

from hirely.models.user import User
from hirely.models.candidate import Candidate
from hirely.models.resume_version import ResumeVersion
from hirely.models.job_application import JobApplication, APPLICATION_STATUSES
from hirely.models.jd_template import JDTemplate
from hirely.models.mock_interview import MockInterview
from hirely.models.user_profile import UserProfile
from hirely.models.skill_recommendation import SkillRecommendation, RECOMMENDATION_STATUSES

__all__ = [
    "User",
    "Candidate",
    "ResumeVersion",
    "JobApplication",
    "APPLICATION_STATUSES",
    "JDTemplate",
    "MockInterview",
    "UserProfile",
    "SkillRecommendation",
    "RECOMMENDATION_STATUSES",
]
