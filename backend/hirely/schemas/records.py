"""Request/response schemas for the persisted records."""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel

ApplicationStatus = Literal[
    "not_applied",
    "applied",
    "screening",
    "interview_scheduled",
    "interviewed",
    "offer",
    "rejected",
    "accepted",
    "withdrawn",
]


# ── Candidates ──────────────────────────────────────────────────────────────

class CandidateCreate(BaseModel):
    name: str
    cv_text: str = ""
    jd_text: str = ""
    questions: list[dict] = []
    trap_questions: list[dict] = []
    risk_factors: list[dict] = []


class CandidateUpdate(BaseModel):
    name: Optional[str] = None
    cv_text: Optional[str] = None
    jd_text: Optional[str] = None
    questions: Optional[list[dict]] = None
    trap_questions: Optional[list[dict]] = None
    risk_factors: Optional[list[dict]] = None
    transcript: Optional[str] = None
    human_grades: Optional[dict[str, float]] = None
    ai_grades: Optional[dict[str, float]] = None
    notes: Optional[str] = None
    interviewed_at: Optional[datetime] = None


class CandidateResponse(BaseModel):
    id: str
    name: str
    cv_text: str
    jd_text: str
    questions: list[dict]
    trap_questions: list[dict]
    risk_factors: list[dict]
    transcript: str
    human_grades: dict[str, float]
    ai_grades: dict[str, float]
    notes: str
    interviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── Resume versions ─────────────────────────────────────────────────────────

class ResumeVersionCreate(BaseModel):
    version_name: str
    content: dict[str, Any]
    skill_graph: Optional[list[dict]] = None
    mode: Literal["technical", "leadership"] = "technical"
    match_score: Optional[int] = None


class ResumeVersionUpdate(BaseModel):
    version_name: Optional[str] = None
    content: Optional[dict[str, Any]] = None
    skill_graph: Optional[list[dict]] = None
    mode: Optional[Literal["technical", "leadership"]] = None
    is_active: Optional[bool] = None
    match_score: Optional[int] = None


class ResumeVersionResponse(BaseModel):
    id: str
    version_name: str
    content: dict[str, Any]
    skill_graph: Optional[list[dict]] = None
    mode: str
    is_active: bool
    match_score: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── Job applications ────────────────────────────────────────────────────────

class JobApplicationCreate(BaseModel):
    company_name: str
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    resume_version_id: Optional[str] = None
    morphed_resume_name: str
    talent_density_score: Optional[int] = None
    gap_analysis: Optional[dict[str, Any]] = None
    notes: Optional[str] = None
    application_link: Optional[str] = None


class StatusUpdate(BaseModel):
    status: ApplicationStatus
    applied_at: Optional[datetime] = None
    interview_date: Optional[datetime] = None
    notes: Optional[str] = None


class JobApplicationResponse(BaseModel):
    id: str
    company_name: str
    job_title: Optional[str] = None
    job_description: Optional[str] = None
    resume_version_id: Optional[str] = None
    morphed_resume_name: str
    status: str
    morphed_at: Optional[datetime] = None
    applied_at: Optional[datetime] = None
    interview_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
    talent_density_score: Optional[int] = None
    gap_analysis: Optional[dict[str, Any]] = None
    notes: Optional[str] = None
    application_link: Optional[str] = None

    class Config:
        from_attributes = True


# ── JD templates ────────────────────────────────────────────────────────────

class JDTemplateCreate(BaseModel):
    title: str
    content: str
    talent_density_score: Optional[int] = None
    first_90_days: Optional[list[dict]] = None
    culture_pulse: Optional[list[dict]] = None
    bias_flags: list[dict] = []


class JDTemplateResponse(BaseModel):
    id: str
    title: str
    content: str
    talent_density_score: Optional[int] = None
    first_90_days: Optional[list[dict]] = None
    culture_pulse: Optional[list[dict]] = None
    bias_flags: list[dict] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── Mock interviews ─────────────────────────────────────────────────────────

class MockInterviewCreate(BaseModel):
    persona: str
    difficulty: Literal["coaching", "standard", "high-stress"] = "standard"
    transcript: Optional[str] = None
    performance_score: Optional[float] = None
    questions_asked: int = 0
    ai_feedback: Optional[list[dict]] = None
    duration_seconds: Optional[int] = None


class MockInterviewResponse(BaseModel):
    id: str
    persona: str
    difficulty: str
    transcript: Optional[str] = None
    performance_score: Optional[float] = None
    questions_asked: int
    ai_feedback: Optional[list[dict]] = None
    duration_seconds: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── User profile ────────────────────────────────────────────────────────────

class UserProfileUpdate(BaseModel):
    skills: Optional[list[str]] = None
    experience_years: Optional[int] = None
    target_salary_min: Optional[int] = None
    target_salary_max: Optional[int] = None
    preferred_locations: Optional[list[str]] = None
    current_title: Optional[str] = None
    bio: Optional[str] = None


class UserProfileResponse(BaseModel):
    id: str
    skills: list[str]
    experience_years: int
    target_salary_min: Optional[int] = None
    target_salary_max: Optional[int] = None
    preferred_locations: Optional[list[str]] = None
    current_title: Optional[str] = None
    bio: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── Skill recommendations ───────────────────────────────────────────────────

RecommendationStatus = Literal["suggested", "learning", "completed", "dismissed"]


class SkillRecommendationCreate(BaseModel):
    skill_name: str
    reason: Optional[str] = None
    potential_salary_increase: Optional[int] = None
    market_demand_score: Optional[int] = None
    time_to_learn_months: Optional[int] = None


class RecommendationStatusUpdate(BaseModel):
    status: RecommendationStatus


class SkillRecommendationResponse(BaseModel):
    id: str
    skill_name: str
    reason: Optional[str] = None
    potential_salary_increase: Optional[int] = None
    market_demand_score: Optional[int] = None
    time_to_learn_months: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ── Dashboard ───────────────────────────────────────────────────────────────

class CandidateSpotlight(BaseModel):
    id: str
    name: str
    score: Optional[int] = None


class DashboardInsights(BaseModel):
    recent_candidates: list[CandidateSpotlight]
    candidate_count: int
    average_score: Optional[int] = None
    profile_skills: list[str]
