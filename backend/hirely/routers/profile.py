"""Profile router: the career profile and its skill recommendations."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import record_value
from hirely.schemas.records import (
    RecommendationStatusUpdate,
    SkillRecommendationCreate,
    SkillRecommendationResponse,
    UserProfileResponse,
    UserProfileUpdate,
)
from hirely.services import records

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("", response_model=Optional[UserProfileResponse])
def get_profile(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """The caller's profile, or null before the first save."""
    return record_value(records.get_user_profile(db, current_user.id))


@router.put("", response_model=UserProfileResponse)
def save_profile(
    req: UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.upsert_user_profile(db, current_user.id, req))


@router.get("/skill-recommendations", response_model=list[SkillRecommendationResponse])
def list_recommendations(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return record_value(records.list_skill_recommendations(db, current_user.id))


@router.post("/skill-recommendations", response_model=SkillRecommendationResponse, status_code=201)
def add_recommendation(
    req: SkillRecommendationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.save_skill_recommendation(db, current_user.id, req))


@router.patch("/skill-recommendations/{recommendation_id}/status", response_model=SkillRecommendationResponse)
def update_recommendation_status(
    recommendation_id: str,
    req: RecommendationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(
        records.update_skill_recommendation_status(db, current_user.id, recommendation_id, req)
    )
