import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..database import get_db
from ..repositories.jobs import JobRepository
from ..repositories.submissions import SubmissionRepository
from ..schemas.job import ApplicationStatusUpdate, JobCreate
from ..services import jobs as job_service
from ..services.application_listing import list_applications
from ..services.application_status import update_application_status
from ..utils.dependencies import caller_id, get_current_user, get_optional_user
from ..utils.roles import recruiter_only

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.post("", status_code=201)
def create_job(
    payload: JobCreate,
    db: Session = Depends(get_db),
    user=Depends(recruiter_only),
):
    job = job_service.create_job(
        jobs=JobRepository(db),
        actor_id=caller_id(user),
        title=payload.title,
        description=payload.description,
        location=payload.location,
        experience_level=payload.experience_level,
        skills=payload.skills,
        requirements=payload.requirements,
        deadline=payload.deadline,
        is_public=payload.is_public,
        status=payload.status,
    )
    return {"job": job_service.job_to_public(job)}


@router.get("")
def list_jobs(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    mine: bool = Query(default=False, description="Only the caller's own jobs (recruiters)"),
    status: str | None = Query(default=None, description="active/paused/closed/all"),
    db: Session = Depends(get_db),
    user=Depends(get_optional_user),
):
    return job_service.list_jobs(
        jobs=JobRepository(db),
        viewer=user,
        page=page,
        limit=limit,
        mine=mine,
        status=status,
    )


@router.get("/{slug}")
def get_job(
    slug: str,
    db: Session = Depends(get_db),
    user=Depends(get_optional_user),
):
    job = job_service.get_job_by_slug(
        jobs=JobRepository(db),
        slug=slug,
        viewer_id=caller_id(user) if user else None,
    )
    return {"job": job_service.job_to_public(job)}


@router.get("/{slug}/applications")
def job_applications(
    slug: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    status: str | None = Query(default=None, description="pending/reviewed/shortlisted/rejected/all"),
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    return list_applications(
        jobs=JobRepository(db),
        submissions=SubmissionRepository(db),
        actor_id=caller_id(user),
        slug=slug,
        page=page,
        limit=limit,
        status=status,
    )


@router.put("/{slug}/applications/{application_id}")
def update_job_application(
    slug: str,
    application_id: int,
    payload: ApplicationStatusUpdate,
    db: Session = Depends(get_db),
    user=Depends(get_current_user),
):
    application = update_application_status(
        jobs=JobRepository(db),
        submissions=SubmissionRepository(db),
        actor_id=caller_id(user),
        slug=slug,
        application_id=application_id,
        status=payload.status,
    )
    return {
        "message": "Application status updated successfully",
        "application": application,
    }
