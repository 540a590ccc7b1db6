"""Job application model: tracks one morphed resume sent to one company."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from hirely.database import Base

APPLICATION_STATUSES = (
    "not_applied",
    "applied",
    "screening",
    "interview_scheduled",
    "interviewed",
    "offer",
    "rejected",
    "accepted",
    "withdrawn",
)


class JobApplication(Base):
    __tablename__ = "job_applications"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    company_name = Column(String(255), nullable=False)
    job_title = Column(String(255), nullable=True)
    job_description = Column(Text, nullable=True)
    resume_version_id = Column(String(36), ForeignKey("resume_versions.id", ondelete="SET NULL"), nullable=True)
    morphed_resume_name = Column(String(255), nullable=False)

    # Status is a label; any transition is allowed.
    status = Column(String(32), nullable=False, default="not_applied")
    morphed_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    applied_at = Column(DateTime, nullable=True)
    interview_date = Column(DateTime, nullable=True)
    last_updated = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    talent_density_score = Column(Integer, nullable=True)
    gap_analysis = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    application_link = Column(String(1024), nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="job_applications")
