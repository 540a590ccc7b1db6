"""Market oracle router."""

from fastapi import APIRouter, Depends

from hirely.agents import market_oracle
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import feature_value
from hirely.schemas.market import FitScoreRequest, FitScoreResponse, MarketInsights, MarketInsightsRequest

router = APIRouter(prefix="/api/market", tags=["market"])


@router.post("/insights", response_model=MarketInsights)
async def insights(req: MarketInsightsRequest, current_user: User = Depends(get_current_user)):
    return feature_value(await market_oracle.get_market_insights(req.skills))


@router.post("/fit-score", response_model=FitScoreResponse)
def fit_score(req: FitScoreRequest):
    """How well a skill set covers a job's listed skills. No AI call."""
    return FitScoreResponse(fit_score=market_oracle.calculate_fit_score(req.user_skills, req.job_skills))
