import logging
from datetime import timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models import Interview, JobApplication, User
from app.schemas import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    InterviewCreate,
    InterviewResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter()

SORT_COLUMNS = {
    "position_name": JobApplication.position_name,
    "employer_name": JobApplication.employer_name,
    "created_at": JobApplication.created_at,
}


@router.get("", response_model=ApplicationListResponse)
def list_applications(
    search: str | None = Query(None, description="Search position, employer and status"),
    status_filter: str | None = Query(None, alias="status", description="Filter by status"),
    sort: str = Query("created_at", description="position_name, employer_name or created_at"),
    order: str = Query("desc", description="asc or desc"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's applications."""
    query = db.query(JobApplication).filter(JobApplication.user_id == user.id)

    if search:
        search_term = f"%{search}%"
        query = query.filter(
            or_(
                JobApplication.position_name.ilike(search_term),
                JobApplication.employer_name.ilike(search_term),
                JobApplication.status.ilike(search_term),
            )
        )
    if status_filter:
        query = query.filter(JobApplication.status == status_filter)

    # Unknown sort keys fall back to newest first
    column = SORT_COLUMNS.get(sort)
    if column is None:
        ordering = JobApplication.created_at.desc()
    else:
        ordering = column.asc() if order == "asc" else column.desc()

    applications = query.order_by(ordering, JobApplication.id.desc()).all()
    return ApplicationListResponse(applications=applications, total=len(applications))


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
def create_application(
    data: ApplicationCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a new job application for the current user."""
    application = JobApplication(user_id=user.id, **data.model_dump(exclude={"status"}), status=data.status.value)
    db.add(application)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Failed to create application for user {user.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save application. Please try again.",
        )
    db.refresh(application)
    return application


def _get_owned_application(db: Session, application_id: int, user: User) -> JobApplication:
    application = (
        db.query(JobApplication)
        .filter(JobApplication.id == application_id, JobApplication.user_id == user.id)
        .first()
    )
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return application


@router.get("/{application_id}/interviews", response_model=list[InterviewResponse])
def list_interviews(
    application_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    application = _get_owned_application(db, application_id, user)
    return (
        db.query(Interview)
        .filter(Interview.application_id == application.id)
        .order_by(Interview.interview_date.asc())
        .all()
    )


@router.post(
    "/{application_id}/interviews",
    response_model=InterviewResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_interview(
    application_id: int,
    data: InterviewCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Schedule an interview for one of the current user's applications."""
    application = _get_owned_application(db, application_id, user)
    interview_date = data.interview_date
    if interview_date.tzinfo is not None:
        # Stored as naive UTC
        interview_date = interview_date.astimezone(timezone.utc).replace(tzinfo=None)

    interview = Interview(
        application_id=application.id,
        user_id=user.id,
        interview_date=interview_date,
        interview_type=data.interview_type,
        location=data.location,
        notes=data.notes,
    )
    db.add(interview)
    try:
        db.commit()
    except Exception:
        db.rollback()
        logger.exception(f"Failed to create interview for application {application.id}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to save interview. Please try again.",
        )
    db.refresh(interview)
    return interview
