"""Job-description generator shapes and bias-scan payloads."""

from typing import Optional

from pydantic import BaseModel, Field

from hirely.schemas.common import CamelModel


class BiasFlag(BaseModel):
    text: str
    issue: str
    suggestion: str


class JDRequest(BaseModel):
    role_title: str = ""
    department: str = "Engineering"
    seniority: str = "Senior"
    team_context: str = ""
    company_info: str = ""
    style: str = "startup"
    include_compensation: bool = False
    salary_range: str = ""


class Milestone(CamelModel):
    day: str
    milestone: str = ""


class CultureTrait(CamelModel):
    trait: str
    description: str = ""


class GeneratedJD(CamelModel):
    role_title: str = ""
    mission_statement: str = ""
    overview: str = ""
    first_90_days: list[Milestone] = Field(default=[], alias="first90Days")
    core_requirements: list[str] = []
    nice_to_have: list[str] = []
    culture_pulse: list[CultureTrait] = []
    talent_density: str = ""
    growth_path: list[str] = []
    compensation: Optional[str] = None
    benefits: list[str] = []


class JDResult(CamelModel):
    jd: GeneratedJD
    text: str
    talent_density_score: int
    bias_flags: list[BiasFlag] = []


class BiasScanRequest(BaseModel):
    text: str


class BiasFixRequest(BaseModel):
    text: str
    term: str
    suggestion: str


class BiasScanResponse(BaseModel):
    text: str
    flags: list[BiasFlag]
    clean: bool
