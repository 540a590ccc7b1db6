"""Dashboard router."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import record_value
from hirely.schemas.records import DashboardInsights
from hirely.services import records

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/insights", response_model=DashboardInsights)
def insights(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    """Recent candidates scored from their AI grades, and the profile's leading skills."""
    return record_value(records.dashboard_insights(db, current_user.id))
