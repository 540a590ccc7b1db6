"""Interview-suite shapes: battle plans, grading, and the shadow interview."""

from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from hirely.schemas.common import CamelModel, clamp_number

RiskLevel = Literal["high", "medium", "low"]
Difficulty = Literal["coaching", "standard", "high-stress"]
TipCategory = Literal["behavioral", "technical", "negotiation", "general"]


# ── Battle plan ─────────────────────────────────────────────────────────────

class RiskFactor(CamelModel):
    level: RiskLevel = "medium"
    description: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _coerce_level(cls, v):
        # Anything outside the three known levels is stored as medium.
        value = str(v or "").strip().lower()
        return value if value in ("high", "medium", "low") else "medium"


class CoreQuestion(CamelModel):
    question: str
    purpose: str = ""
    expected_answer: str = ""


class TrapQuestion(CamelModel):
    question: str
    trap: str = ""
    good_answer: str = ""


class BattlePlan(CamelModel):
    risk_factors: list[RiskFactor] = []
    core_questions: list[CoreQuestion] = []
    trap_questions: list[TrapQuestion] = []


class BattlePlanRequest(BaseModel):
    candidate_name: str
    cv_text: str
    jd_text: str


# ── Co-pilot ────────────────────────────────────────────────────────────────

class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class FollowUpRequest(BaseModel):
    question: str
    purpose: str = ""
    transcript: str


class CopilotRequest(BaseModel):
    messages: list[ChatMessage]
    transcript: str


# ── Calibration ─────────────────────────────────────────────────────────────

GRADE_KEYS = ["communication", "technical", "problem_solving", "culture_fit", "leadership", "energy"]


class Grades(CamelModel):
    communication: float = 0.0
    technical: float = 0.0
    problem_solving: float = 0.0
    culture_fit: float = 0.0
    leadership: float = 0.0
    energy: float = 0.0

    @field_validator(*GRADE_KEYS, mode="before")
    @classmethod
    def _clamp(cls, v):
        return clamp_number(v, 0, 10, 0.0)


class AssessRequest(BaseModel):
    candidate_name: str = ""
    jd_text: str = ""
    transcript: str


class InterviewSummaryRequest(BaseModel):
    candidate_name: str = ""
    transcript: str


# ── Shadow interview ────────────────────────────────────────────────────────

class ShadowFeedback(CamelModel):
    score: int = 5
    refinement: str = ""
    trap: str = ""

    @field_validator("score", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        return int(round(clamp_number(v, 1, 10, 5)))


class ShadowTurn(CamelModel):
    message: str
    feedback: Optional[ShadowFeedback] = None
    persona: str = ""


class ShadowStartRequest(BaseModel):
    persona_id: str = "tech-lead"
    difficulty: Difficulty = "standard"
    resume_text: str
    jd_text: str


class ShadowTurnRequest(ShadowStartRequest):
    history: list[ChatMessage] = []
    answer: str


class DifficultyRequest(BaseModel):
    scores: list[int]
    current: Difficulty = "standard"


class DifficultyResponse(BaseModel):
    difficulty: Difficulty
    average_score: float


class InterviewTip(CamelModel):
    title: str
    content: str = ""
    category: TipCategory = "general"

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, v):
        value = str(v or "").strip().lower()
        return value if value in ("behavioral", "technical", "negotiation", "general") else "general"


class TipsRequest(BaseModel):
    resume_text: str
    jd_text: str
