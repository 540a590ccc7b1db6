"""Applications router: the morphed-resume application tracker."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from hirely.database import get_db
from hirely.middleware.auth import get_current_user
from hirely.models.user import User
from hirely.routers.results import record_value
from hirely.schemas.records import (
    ApplicationStatus,
    JobApplicationCreate,
    JobApplicationResponse,
    StatusUpdate,
)
from hirely.services import records

router = APIRouter(prefix="/api/applications", tags=["applications"])


@router.get("", response_model=list[JobApplicationResponse])
def list_applications(
    status: Optional[ApplicationStatus] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """List applications, most recently updated first."""
    return record_value(records.list_job_applications(db, current_user.id, status=status))


@router.post("", response_model=JobApplicationResponse, status_code=201)
def create_application(
    req: JobApplicationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Track a new application. It starts as not_applied."""
    return record_value(records.create_job_application(db, current_user.id, req))


@router.patch("/{application_id}/status", response_model=JobApplicationResponse)
def update_status(
    application_id: str,
    req: StatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return record_value(records.update_application_status(db, current_user.id, application_id, req))


@router.delete("/{application_id}", status_code=204)
def delete_application(
    application_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record_value(records.delete_job_application(db, current_user.id, application_id))
