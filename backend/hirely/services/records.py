"""Record service: owner-scoped CRUD for the persisted records.

Every accessor takes the session and the owning user's id first, filters on
that id, and returns an OperationResult instead of raising. A database
failure rolls the session back and comes back as success=False carrying
the backend message.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional, Type

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hirely.database import Base
from hirely.models.candidate import Candidate
from hirely.models.jd_template import JDTemplate
from hirely.models.job_application import JobApplication
from hirely.models.mock_interview import MockInterview
from hirely.models.resume_version import ResumeVersion
from hirely.models.skill_recommendation import SkillRecommendation
from hirely.models.user_profile import UserProfile
from hirely.schemas.common import OperationResult
from hirely.schemas.records import (
    CandidateCreate,
    CandidateResponse,
    CandidateSpotlight,
    CandidateUpdate,
    DashboardInsights,
    JDTemplateCreate,
    JDTemplateResponse,
    JobApplicationCreate,
    JobApplicationResponse,
    MockInterviewCreate,
    MockInterviewResponse,
    RecommendationStatusUpdate,
    ResumeVersionCreate,
    ResumeVersionResponse,
    ResumeVersionUpdate,
    SkillRecommendationCreate,
    SkillRecommendationResponse,
    StatusUpdate,
    UserProfileResponse,
    UserProfileUpdate,
)

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _guarded(db: Session, action: Callable[[], OperationResult]) -> OperationResult:
    try:
        return action()
    except SQLAlchemyError as e:
        db.rollback()
        message = str(e.__cause__ or e)
        logger.error("Record operation failed: %s", message)
        return OperationResult(success=False, error=message)


def _owned(db: Session, model: Type[Base], user_id: str, record_id: str):
    return (
        db.query(model)
        .filter(model.id == record_id, model.user_id == user_id)
        .first()
    )


def _not_found(label: str) -> OperationResult:
    return OperationResult(success=False, error=f"{label} not found")


def _delete(db: Session, model: Type[Base], label: str, user_id: str, record_id: str) -> OperationResult:
    def action():
        row = _owned(db, model, user_id, record_id)
        if not row:
            return _not_found(label)
        db.delete(row)
        db.commit()
        return OperationResult(success=True)

    return _guarded(db, action)


# ── Candidates ──────────────────────────────────────────────────────────────

def create_candidate(db: Session, user_id: str, data: CandidateCreate) -> OperationResult:
    def action():
        candidate = Candidate(user_id=user_id, **data.model_dump())
        db.add(candidate)
        db.commit()
        db.refresh(candidate)
        return OperationResult(success=True, data=CandidateResponse.model_validate(candidate))

    return _guarded(db, action)


def list_candidates(db: Session, user_id: str) -> OperationResult:
    def action():
        rows = (
            db.query(Candidate)
            .filter(Candidate.user_id == user_id)
            .order_by(Candidate.created_at.desc())
            .all()
        )
        return OperationResult(success=True, data=[CandidateResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


def get_candidate(db: Session, user_id: str, candidate_id: str) -> OperationResult:
    def action():
        row = _owned(db, Candidate, user_id, candidate_id)
        if not row:
            return _not_found("Candidate")
        return OperationResult(success=True, data=CandidateResponse.model_validate(row))

    return _guarded(db, action)


def update_candidate(db: Session, user_id: str, candidate_id: str, data: CandidateUpdate) -> OperationResult:
    """Apply only the fields that were sent. Last writer wins."""
    def action():
        row = _owned(db, Candidate, user_id, candidate_id)
        if not row:
            return _not_found("Candidate")
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        row.updated_at = _now()
        db.commit()
        db.refresh(row)
        return OperationResult(success=True, data=CandidateResponse.model_validate(row))

    return _guarded(db, action)


def delete_candidate(db: Session, user_id: str, candidate_id: str) -> OperationResult:
    return _delete(db, Candidate, "Candidate", user_id, candidate_id)


# ── Resume versions ─────────────────────────────────────────────────────────

def save_resume_version(db: Session, user_id: str, data: ResumeVersionCreate) -> OperationResult:
    def action():
        version = ResumeVersion(user_id=user_id, **data.model_dump())
        db.add(version)
        db.commit()
        db.refresh(version)
        return OperationResult(success=True, data=ResumeVersionResponse.model_validate(version))

    return _guarded(db, action)


def list_resume_versions(db: Session, user_id: str) -> OperationResult:
    def action():
        rows = (
            db.query(ResumeVersion)
            .filter(ResumeVersion.user_id == user_id)
            .order_by(ResumeVersion.created_at.desc())
            .all()
        )
        return OperationResult(success=True, data=[ResumeVersionResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


def update_resume_version(
    db: Session, user_id: str, version_id: str, data: ResumeVersionUpdate
) -> OperationResult:
    def action():
        row = _owned(db, ResumeVersion, user_id, version_id)
        if not row:
            return _not_found("Resume version")
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        row.updated_at = _now()
        db.commit()
        db.refresh(row)
        return OperationResult(success=True, data=ResumeVersionResponse.model_validate(row))

    return _guarded(db, action)


def delete_resume_version(db: Session, user_id: str, version_id: str) -> OperationResult:
    return _delete(db, ResumeVersion, "Resume version", user_id, version_id)


# ── Job applications ────────────────────────────────────────────────────────

def create_job_application(db: Session, user_id: str, data: JobApplicationCreate) -> OperationResult:
    def action():
        if data.resume_version_id and not _owned(db, ResumeVersion, user_id, data.resume_version_id):
            return _not_found("Resume version")
        application = JobApplication(user_id=user_id, status="not_applied", **data.model_dump())
        db.add(application)
        db.commit()
        db.refresh(application)
        return OperationResult(success=True, data=JobApplicationResponse.model_validate(application))

    return _guarded(db, action)


def list_job_applications(db: Session, user_id: str, status: Optional[str] = None) -> OperationResult:
    def action():
        query = db.query(JobApplication).filter(JobApplication.user_id == user_id)
        if status:
            query = query.filter(JobApplication.status == status)
        rows = query.order_by(JobApplication.last_updated.desc()).all()
        return OperationResult(success=True, data=[JobApplicationResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


def update_application_status(
    db: Session, user_id: str, application_id: str, update: StatusUpdate
) -> OperationResult:
    """Move an application to any status; refreshes last_updated."""
    def action():
        row = _owned(db, JobApplication, user_id, application_id)
        if not row:
            return _not_found("Job application")
        row.status = update.status
        row.last_updated = _now()
        if update.applied_at is not None:
            row.applied_at = update.applied_at
        if update.interview_date is not None:
            row.interview_date = update.interview_date
        if update.notes is not None:
            row.notes = update.notes
        db.commit()
        db.refresh(row)
        return OperationResult(success=True, data=JobApplicationResponse.model_validate(row))

    return _guarded(db, action)


def delete_job_application(db: Session, user_id: str, application_id: str) -> OperationResult:
    return _delete(db, JobApplication, "Job application", user_id, application_id)


# ── JD templates ────────────────────────────────────────────────────────────

def save_jd_template(db: Session, user_id: str, data: JDTemplateCreate) -> OperationResult:
    def action():
        template = JDTemplate(user_id=user_id, **data.model_dump())
        db.add(template)
        db.commit()
        db.refresh(template)
        return OperationResult(success=True, data=JDTemplateResponse.model_validate(template))

    return _guarded(db, action)


def list_jd_templates(db: Session, user_id: str) -> OperationResult:
    def action():
        rows = (
            db.query(JDTemplate)
            .filter(JDTemplate.user_id == user_id)
            .order_by(JDTemplate.created_at.desc())
            .all()
        )
        return OperationResult(success=True, data=[JDTemplateResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


def delete_jd_template(db: Session, user_id: str, template_id: str) -> OperationResult:
    return _delete(db, JDTemplate, "JD template", user_id, template_id)


# ── Mock interviews ─────────────────────────────────────────────────────────

def save_mock_interview(db: Session, user_id: str, data: MockInterviewCreate) -> OperationResult:
    def action():
        session = MockInterview(user_id=user_id, **data.model_dump())
        db.add(session)
        db.commit()
        db.refresh(session)
        return OperationResult(success=True, data=MockInterviewResponse.model_validate(session))

    return _guarded(db, action)


def list_mock_interviews(db: Session, user_id: str) -> OperationResult:
    def action():
        rows = (
            db.query(MockInterview)
            .filter(MockInterview.user_id == user_id)
            .order_by(MockInterview.created_at.desc())
            .all()
        )
        return OperationResult(success=True, data=[MockInterviewResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


# ── User profile ────────────────────────────────────────────────────────────

def get_user_profile(db: Session, user_id: str) -> OperationResult:
    """The caller's profile; data is None when none has been saved yet."""
    def action():
        row = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        return OperationResult(success=True, data=UserProfileResponse.model_validate(row) if row else None)

    return _guarded(db, action)


def upsert_user_profile(db: Session, user_id: str, data: UserProfileUpdate) -> OperationResult:
    """Create the profile on first save, otherwise apply only the fields that were sent."""
    def action():
        row = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        if not row:
            row = UserProfile(user_id=user_id)
            db.add(row)
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        row.updated_at = _now()
        db.commit()
        db.refresh(row)
        return OperationResult(success=True, data=UserProfileResponse.model_validate(row))

    return _guarded(db, action)


# ── Skill recommendations ───────────────────────────────────────────────────

def save_skill_recommendation(db: Session, user_id: str, data: SkillRecommendationCreate) -> OperationResult:
    def action():
        recommendation = SkillRecommendation(user_id=user_id, status="suggested", **data.model_dump())
        db.add(recommendation)
        db.commit()
        db.refresh(recommendation)
        return OperationResult(success=True, data=SkillRecommendationResponse.model_validate(recommendation))

    return _guarded(db, action)


def list_skill_recommendations(db: Session, user_id: str) -> OperationResult:
    """Highest market demand first; recommendations without a score go last."""
    def action():
        rows = (
            db.query(SkillRecommendation)
            .filter(SkillRecommendation.user_id == user_id)
            .order_by(
                SkillRecommendation.market_demand_score.is_(None),
                SkillRecommendation.market_demand_score.desc(),
            )
            .all()
        )
        return OperationResult(success=True, data=[SkillRecommendationResponse.model_validate(r) for r in rows])

    return _guarded(db, action)


def update_skill_recommendation_status(
    db: Session, user_id: str, recommendation_id: str, update: RecommendationStatusUpdate
) -> OperationResult:
    def action():
        row = _owned(db, SkillRecommendation, user_id, recommendation_id)
        if not row:
            return _not_found("Skill recommendation")
        row.status = update.status
        db.commit()
        db.refresh(row)
        return OperationResult(success=True, data=SkillRecommendationResponse.model_validate(row))

    return _guarded(db, action)


# ── Dashboard ───────────────────────────────────────────────────────────────

SPOTLIGHT_SIZE = 3
ROADMAP_SKILLS = 4


def _percent(value: float) -> int:
    # Halves round up.
    return math.floor(value + 0.5)


def candidate_score(ai_grades: dict) -> Optional[int]:
    """Mean of the numeric AI grades scaled from 0-10 to 0-100, None without grades."""
    values = [
        v for v in (ai_grades or {}).values()
        if isinstance(v, (int, float)) and not isinstance(v, bool)
    ]
    if not values:
        return None
    return _percent(sum(values) / len(values) * 10)


def dashboard_insights(db: Session, user_id: str) -> OperationResult:
    """Most recently updated candidates with their scores, plus the profile's leading skills."""
    def action():
        query = db.query(Candidate).filter(Candidate.user_id == user_id)
        recent = query.order_by(Candidate.updated_at.desc()).limit(SPOTLIGHT_SIZE).all()
        spotlight = [
            CandidateSpotlight(id=c.id, name=c.name or "Unknown Candidate", score=candidate_score(c.ai_grades))
            for c in recent
        ]
        scored = [c.score for c in spotlight if c.score is not None]
        profile = db.query(UserProfile).filter(UserProfile.user_id == user_id).first()
        return OperationResult(
            success=True,
            data=DashboardInsights(
                recent_candidates=spotlight,
                candidate_count=query.count(),
                average_score=_percent(sum(scored) / len(scored)) if scored else None,
                profile_skills=list(profile.skills or [])[:ROADMAP_SKILLS] if profile else [],
            ),
        )

    return _guarded(db, action)
