"""Interview router: battle plans, co-pilot, calibration and candidate records."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hirely.agents import battle_plan
from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import feature_value, record_value
from hirely.schemas.interview import (
    AssessRequest,
    BattlePlan,
    BattlePlanRequest,
    CopilotRequest,
    FollowUpRequest,
    InterviewSummaryRequest,
)
from hirely.schemas.records import CandidateCreate, CandidateResponse, CandidateUpdate
from hirely.services import records

router = APIRouter(prefix="/api/interview", tags=["interview"])


@router.post("/battle-plan", response_model=BattlePlan)
async def generate_battle_plan(req: BattlePlanRequest, current_user: User = Depends(get_current_user)):
    """Risk factors plus core and trap questions for one candidate."""
    return feature_value(
        await battle_plan.generate_battle_plan(req.cv_text, req.jd_text, req.candidate_name)
    )


@router.post("/follow-ups")
async def follow_ups(req: FollowUpRequest, current_user: User = Depends(get_current_user)):
    nudge = feature_value(await battle_plan.generate_follow_ups(req.question, req.purpose, req.transcript))
    return {"follow_ups": nudge}


@router.post("/copilot")
async def copilot(req: CopilotRequest, current_user: User = Depends(get_current_user)):
    reply = feature_value(await battle_plan.live_copilot_reply(req.messages, req.transcript))
    return {"reply": reply}


@router.post("/assess")
async def assess(req: AssessRequest, current_user: User = Depends(get_current_user)):
    """AI calibration grades; the recruiter's own grades live on the candidate."""
    grades = feature_value(
        await battle_plan.assess_transcript(req.candidate_name, req.jd_text, req.transcript)
    )
    return {
        "grades": grades.model_dump(by_alias=True),
        "average": round(battle_plan.grade_average(grades), 2),
    }


@router.post("/summary")
async def summary(req: InterviewSummaryRequest, current_user: User = Depends(get_current_user)):
    text = feature_value(await battle_plan.summarize_interview(req.candidate_name, req.transcript))
    return {"summary": text}


# ── Candidates ───────────────────────────────────────────────────────────────

@router.get("/candidates", response_model=list[CandidateResponse])
def list_candidates(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return record_value(records.list_candidates(db, current_user.id))


@router.post("/candidates", response_model=CandidateResponse, status_code=201)
def create_candidate(
    req: CandidateCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.create_candidate(db, current_user.id, req))


@router.get("/candidates/{candidate_id}", response_model=CandidateResponse)
def get_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.get_candidate(db, current_user.id, candidate_id))


@router.patch("/candidates/{candidate_id}", response_model=CandidateResponse)
def update_candidate(
    candidate_id: str,
    req: CandidateUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.update_candidate(db, current_user.id, candidate_id, req))


@router.delete("/candidates/{candidate_id}", status_code=204)
def delete_candidate(
    candidate_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record_value(records.delete_candidate(db, current_user.id, candidate_id))
