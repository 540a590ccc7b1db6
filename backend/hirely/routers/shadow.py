"""Shadow interview router: persona mock interviews and saved sessions."""

import json
from contextlib import aclosing

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from hirely.agents import shadow_interviewer
from hirely.agents.personas import DEFAULT_PERSONA, DIFFICULTIES, PERSONAS
from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import feature_value, record_value
from hirely.schemas.interview import (
    DifficultyRequest,
    DifficultyResponse,
    InterviewTip,
    ShadowStartRequest,
    ShadowTurn,
    ShadowTurnRequest,
    TipsRequest,
)
from hirely.schemas.records import MockInterviewCreate, MockInterviewResponse
from hirely.services import records
from hirely.services.ai_client import CompletionError

router = APIRouter(prefix="/api/shadow", tags=["shadow"])

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _event(event: str, data) -> str:
    return f"data: {json.dumps({'event': event, 'data': data})}\n\n"


@router.get("/personas")
def list_personas():
    return {
        "default": DEFAULT_PERSONA,
        "difficulties": DIFFICULTIES,
        "personas": [{"id": key, **persona} for key, persona in PERSONAS.items()],
    }


@router.post("/start", response_model=ShadowTurn)
async def start(req: ShadowStartRequest, current_user: User = Depends(get_current_user)):
    return feature_value(
        await shadow_interviewer.start_interview(req.persona_id, req.difficulty, req.resume_text, req.jd_text)
    )


@router.post("/turn", response_model=ShadowTurn)
async def turn(req: ShadowTurnRequest, current_user: User = Depends(get_current_user)):
    """Feedback on the answer plus the next question. feedback may be null."""
    return feature_value(
        await shadow_interviewer.interview_turn(
            req.history, req.answer, req.persona_id, req.difficulty, req.resume_text, req.jd_text
        )
    )


@router.post("/stream")
async def stream(req: ShadowTurnRequest, current_user: User = Depends(get_current_user)):
    """SSE stream of the interviewer's plain-text reply.

    Closing the connection early closes the provider stream.
    """
    problem = shadow_interviewer.validate_session(req.persona_id, req.difficulty, req.resume_text, req.jd_text)
    if problem:
        raise HTTPException(status_code=400, detail=problem)

    chunks = shadow_interviewer.stream_interview_turn(
        req.history, req.answer, req.persona_id, req.difficulty, req.resume_text, req.jd_text
    )
    return StreamingResponse(_sse_generator(chunks), media_type="text/event-stream", headers=_SSE_HEADERS)


async def _sse_generator(chunks):
    async with aclosing(chunks) as source:
        try:
            async for chunk in source:
                yield _event("chunk", chunk)
        except CompletionError as e:
            yield _event("error", str(e))
            return
    yield _event("complete", None)


@router.post("/tips", response_model=list[InterviewTip])
async def tips(req: TipsRequest, current_user: User = Depends(get_current_user)):
    return feature_value(await shadow_interviewer.generate_interview_tips(req.resume_text, req.jd_text))


@router.post("/difficulty", response_model=DifficultyResponse)
def difficulty(req: DifficultyRequest):
    """Adaptive difficulty from the running feedback scores."""
    return DifficultyResponse(
        difficulty=shadow_interviewer.next_difficulty(req.scores, req.current),
        average_score=shadow_interviewer.average_score(req.scores),
    )


# ── Saved sessions ───────────────────────────────────────────────────────────

@router.get("/sessions", response_model=list[MockInterviewResponse])
def list_sessions(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return record_value(records.list_mock_interviews(db, current_user.id))


@router.post("/sessions", response_model=MockInterviewResponse, status_code=201)
def save_session(
    req: MockInterviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.save_mock_interview(db, current_user.id, req))
