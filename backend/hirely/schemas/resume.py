"""Resume shapes and the payloads of the resume-side AI features."""

from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from hirely.schemas.common import CamelModel, clamp_number

DEFAULT_SECTION_ORDER = ["experience", "skills", "education"]


class PersonalInfo(BaseModel):
    name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""


class ResumeSection(BaseModel):
    title: str
    items: list[str] = []


class Resume(BaseModel):
    personal: PersonalInfo = PersonalInfo()
    experience: list[ResumeSection] = []
    education: list[ResumeSection] = []
    skills: list[str] = []
    certifications: Optional[list[str]] = None
    projects: Optional[list[ResumeSection]] = None


# ── Morphing ────────────────────────────────────────────────────────────────

class MorphAnalysis(CamelModel):
    """What the model returns for a resume/JD match."""

    match_score: int = 0
    highlighted_skills: list[str] = []
    prioritized_experience_indices: Optional[list[int]] = None
    recommended_section_order: Optional[list[str]] = None
    reasoning: Optional[str] = None

    @field_validator("match_score", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        return int(round(clamp_number(v, 0, 100, 0)))


class MorphedResume(Resume):
    """A resume reordered for one job description.

    analysis_available is False when the model call failed; match_score is
    then 0 and must not be read as a real score.
    """

    model_config = CamelModel.model_config

    match_score: int = 0
    highlighted_skills: list[str] = []
    prioritized_sections: list[str] = list(DEFAULT_SECTION_ORDER)
    analysis_available: bool = False
    reasoning: Optional[str] = None
    error: Optional[str] = None


class MorphRequest(BaseModel):
    resume: Resume
    job_description: str


# ── Skill insights ──────────────────────────────────────────────────────────

class SkillInsight(CamelModel):
    skill: str
    category: str = "General"
    level: int = 5

    @field_validator("level", mode="before")
    @classmethod
    def _clamp_level(cls, v):
        return int(round(clamp_number(v, 1, 10, 5)))


class SkillInsightsRequest(BaseModel):
    skills: list[str]


# ── Summary / generation / suggestions ─────────────────────────────────────

class OptimizeSummaryRequest(BaseModel):
    summary: str
    job_description: str


class ResumeDraft(BaseModel):
    """Partial resume produced from a free-text description."""

    personal: PersonalInfo = PersonalInfo()
    experience: list[ResumeSection] = []
    education: list[ResumeSection] = []
    skills: list[str] = []


class GenerateResumeRequest(BaseModel):
    prompt: str


SuggestionSection = Literal["experience", "skills", "summary"]


class SuggestionsRequest(BaseModel):
    resume: Resume
    section: SuggestionSection


# ── Gap analysis ────────────────────────────────────────────────────────────

GapImportance = Literal["critical", "important", "nice-to-have"]


class GapItem(CamelModel):
    skill: str
    importance: GapImportance = "important"
    suggestion: str = ""

    @field_validator("importance", mode="before")
    @classmethod
    def _coerce_importance(cls, v):
        value = str(v or "").strip().lower()
        return value if value in ("critical", "important", "nice-to-have") else "important"


class MorphSuggestion(CamelModel):
    original: str
    suggested: str
    reason: str = ""


class GapAnalysis(CamelModel):
    gap_analysis: list[GapItem] = []
    morph_suggestions: list[MorphSuggestion] = []
    talent_density_score: int = 50

    @field_validator("talent_density_score", mode="before")
    @classmethod
    def _clamp_density(cls, v):
        return int(round(clamp_number(v, 0, 100, 50)))


class GapAnalysisRequest(BaseModel):
    resume_text: str
    job_description: str
