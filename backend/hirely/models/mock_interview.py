"""Mock interview model: a finished shadow-interview session."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from hirely.database import Base


class MockInterview(Base):
    __tablename__ = "mock_interviews"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    persona = Column(String(32), nullable=False)
    difficulty = Column(String(20), nullable=False, default="standard")
    transcript = Column(Text, nullable=True)
    performance_score = Column(Float, nullable=True)   # average feedback score, 1-10
    questions_asked = Column(Integer, nullable=False, default=0)
    ai_feedback = Column(JSON, nullable=True)          # [{score, refinement, trap}]
    duration_seconds = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="mock_interviews")
