"""Resume version model: a saved snapshot of the resume JSON."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from hirely.database import Base


class ResumeVersion(Base):
    __tablename__ = "resume_versions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    version_name = Column(String(255), nullable=False)
    content = Column(JSON, nullable=False)                 # opaque resume blob
    skill_graph = Column(JSON, nullable=True)
    mode = Column(String(20), nullable=False, default="technical")  # technical | leadership
    is_active = Column(Boolean, nullable=False, default=True)
    match_score = Column(Integer, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="resume_versions")
