"""Resume router: morphing, AI writing helpers and saved versions."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hirely.agents import resume_morpher
from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import feature_value, record_value
from hirely.schemas.records import ResumeVersionCreate, ResumeVersionResponse, ResumeVersionUpdate
from hirely.schemas.resume import (
    GapAnalysis,
    GapAnalysisRequest,
    GenerateResumeRequest,
    MorphedResume,
    MorphRequest,
    OptimizeSummaryRequest,
    ResumeDraft,
    SkillInsight,
    SkillInsightsRequest,
    SuggestionsRequest,
)
from hirely.services import records

router = APIRouter(prefix="/api/resume", tags=["resume"])


@router.post("/morph", response_model=MorphedResume)
async def morph(req: MorphRequest, current_user: User = Depends(get_current_user)):
    """Score and reorder a resume for a JD.

    Always 200: check analysisAvailable before trusting matchScore.
    """
    return await resume_morpher.morph_resume_for_jd(req.resume, req.job_description)


@router.post("/skill-insights", response_model=list[SkillInsight])
async def skill_insights(req: SkillInsightsRequest, current_user: User = Depends(get_current_user)):
    return await resume_morpher.generate_skill_insights(req.skills)


@router.post("/optimize-summary")
async def optimize_summary(req: OptimizeSummaryRequest, current_user: User = Depends(get_current_user)):
    summary = await resume_morpher.optimize_summary(req.summary, req.job_description)
    return {"summary": summary}


@router.post("/generate", response_model=ResumeDraft)
async def generate(req: GenerateResumeRequest, current_user: User = Depends(get_current_user)):
    return feature_value(await resume_morpher.generate_resume_from_prompt(req.prompt))


@router.post("/suggestions")
async def suggestions(req: SuggestionsRequest, current_user: User = Depends(get_current_user)):
    return {"suggestions": await resume_morpher.get_resume_suggestions(req.resume, req.section)}


@router.post("/gap-analysis", response_model=GapAnalysis)
async def gap_analysis(req: GapAnalysisRequest, current_user: User = Depends(get_current_user)):
    return feature_value(await resume_morpher.analyze_resume_gaps(req.resume_text, req.job_description))


# ── Saved versions ───────────────────────────────────────────────────────────

@router.get("/versions", response_model=list[ResumeVersionResponse])
def list_versions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return record_value(records.list_resume_versions(db, current_user.id))


@router.post("/versions", response_model=ResumeVersionResponse, status_code=201)
def save_version(
    req: ResumeVersionCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.save_resume_version(db, current_user.id, req))


@router.patch("/versions/{version_id}", response_model=ResumeVersionResponse)
def update_version(
    version_id: str,
    req: ResumeVersionUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.update_resume_version(db, current_user.id, version_id, req))


@router.delete("/versions/{version_id}", status_code=204)
def delete_version(
    version_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record_value(records.delete_resume_version(db, current_user.id, version_id))
