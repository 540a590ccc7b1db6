"""Skill recommendation model: a skill worth learning next, and how far along it is."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from hirely.database import Base

RECOMMENDATION_STATUSES = ("suggested", "learning", "completed", "dismissed")


class SkillRecommendation(Base):
    __tablename__ = "skill_recommendations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    skill_name = Column(String(255), nullable=False)
    reason = Column(Text, nullable=True)
    potential_salary_increase = Column(Integer, nullable=True)
    market_demand_score = Column(Integer, nullable=True)
    time_to_learn_months = Column(Integer, nullable=True)
    status = Column(String(16), nullable=False, default="suggested")
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="skill_recommendations")
