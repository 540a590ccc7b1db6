"""Candidate model: one interviewee with a battle plan and grades."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, JSON, String, Text
from sqlalchemy.orm import relationship

from hirely.database import Base


class Candidate(Base):
    __tablename__ = "candidates"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    cv_text = Column(Text, nullable=False, default="")
    jd_text = Column(Text, nullable=False, default="")

    # Battle plan
    questions = Column(JSON, nullable=False, default=list)        # [{question, purpose, expectedAnswer}]
    trap_questions = Column(JSON, nullable=False, default=list)   # [{question, trap, goodAnswer}]
    risk_factors = Column(JSON, nullable=False, default=list)     # [{level, description}]

    # Co-pilot + calibration
    transcript = Column(Text, nullable=False, default="")
    human_grades = Column(JSON, nullable=False, default=dict)
    ai_grades = Column(JSON, nullable=False, default=dict)
    notes = Column(Text, nullable=False, default="")
    interviewed_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="candidates")
