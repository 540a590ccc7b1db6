"""User profile model: the career-side facts about one user."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from hirely.database import Base


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    # One profile per user; saving again updates it in place.
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True, index=True)
    skills = Column(JSON, nullable=False, default=list)
    experience_years = Column(Integer, nullable=False, default=0)
    target_salary_min = Column(Integer, nullable=True)
    target_salary_max = Column(Integer, nullable=True)
    preferred_locations = Column(JSON, nullable=True)
    current_title = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="profile")
