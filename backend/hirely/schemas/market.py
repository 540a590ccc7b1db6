"""Market insight shapes (salary range, skill demand, next skill)."""

from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from hirely.schemas.common import CamelModel, clamp_number


class SalaryRange(CamelModel):
    min: float = 0
    max: float = 0
    median: float = 0


class SkillHeat(CamelModel):
    skill: str
    demand: float = 0
    growth: float = 0


class NextSkill(CamelModel):
    name: str
    reason: str = ""
    potential_increase: float = 0


class CareerPath(CamelModel):
    title: str
    probability: float = 0


class MarketInsights(CamelModel):
    market_value_score: int = 0
    salary_range: SalaryRange = SalaryRange()
    demand_level: Literal["high", "medium", "low"] = "medium"
    skill_heatmap: list[SkillHeat] = []
    next_logical_skill: Optional[NextSkill] = None
    career_paths: list[CareerPath] = []

    @field_validator("market_value_score", mode="before")
    @classmethod
    def _clamp_score(cls, v):
        return int(round(clamp_number(v, 0, 100, 0)))

    @field_validator("demand_level", mode="before")
    @classmethod
    def _coerce_demand(cls, v):
        value = str(v or "").strip().lower()
        return value if value in ("high", "medium", "low") else "medium"


class MarketInsightsRequest(BaseModel):
    skills: list[str]


class FitScoreRequest(BaseModel):
    user_skills: list[str]
    job_skills: list[str] = []


class FitScoreResponse(BaseModel):
    fit_score: float
