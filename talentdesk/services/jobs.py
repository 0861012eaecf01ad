import logging
import math
import re
import time
from datetime import datetime

from ..models.job import Job
from ..utils.error_handlers import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError, get_error_message
from ..utils.json_fields import dump_json, isoformat, load_string_list
from ..utils.validation import EXPERIENCE_LEVELS, JOB_STATUSES, validate_choice, validate_string_field

logger = logging.getLogger(__name__)

_SLUG_JUNK = re.compile(r"[^a-z0-9]+")


def make_slug(title: str, millis: int | None = None) -> str:
    """``"Senior Dev (Remote)"`` -> ``"senior-dev-remote-1712345678901"``."""
    base = _SLUG_JUNK.sub("-", title.lower()).strip("-") or "job"
    stamp = millis if millis is not None else int(time.time() * 1000)
    return f"{base}-{stamp}"


def _parse_deadline(raw: str | None) -> datetime | None:
    if raw is None or not raw.strip():
        return None
    try:
        return datetime.fromisoformat(raw.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Deadline must be an ISO date")


def _clean_list(values: list[str] | None) -> list[str]:
    return [v.strip() for v in (values or []) if isinstance(v, str) and v.strip()]


def job_to_public(job: Job) -> dict:
    return {
        "id": job.id,
        "slug": job.slug,
        "title": job.title,
        "description": job.description,
        "location": job.location,
        "experienceLevel": job.experience_level,
        "skills": load_string_list(job.skills),
        "requirements": load_string_list(job.requirements),
        "status": job.status or "active",
        "isPublic": bool(job.is_public),
        "deadline": isoformat(job.deadline),
        "applicationCount": job.application_count or 0,
        "createdBy": job.created_by,
        "createdAt": isoformat(job.created_at),
    }


def create_job(
    *,
    jobs,
    actor_id: int,
    title: str | None,
    description: str | None,
    location: str | None = None,
    experience_level: str | None = None,
    skills: list[str] | None = None,
    requirements: list[str] | None = None,
    deadline: str | None = None,
    is_public: bool = True,
    status: str | None = None,
) -> Job:
    clean_title = validate_string_field(title, "Title", max_length=200)
    clean_description = validate_string_field(description, "Description", max_length=5000)

    # Millisecond suffix makes collisions unlikely; bump until free.
    millis = int(time.time() * 1000)
    slug = make_slug(clean_title, millis)
    while jobs.slug_exists(slug):
        millis += 1
        slug = make_slug(clean_title, millis)

    job = Job(
        slug=slug,
        created_by=int(actor_id),
        title=clean_title,
        description=clean_description,
        location=validate_string_field(location, "Location", max_length=100, required=False),
        experience_level=validate_choice(experience_level, "experience level", EXPERIENCE_LEVELS, default="mid"),
        skills=dump_json(_clean_list(skills)),
        requirements=dump_json(_clean_list(requirements)),
        deadline=_parse_deadline(deadline),
        is_public=bool(is_public),
        status=validate_choice(status, "status", JOB_STATUSES, default="active"),
        application_count=0,
    )
    job = jobs.add(job)
    logger.info("User %s created job %s (%s)", actor_id, job.id, job.slug)
    return job


def get_job_by_slug(*, jobs, slug: str, viewer_id: int | None) -> Job:
    """Active jobs only; private ones are visible to their owner alone."""
    job = jobs.find_active_by_slug(slug)
    if job is None:
        raise NotFoundError(get_error_message("job_not_found"))
    if not job.is_public and (viewer_id is None or int(viewer_id) != job.created_by):
        raise NotFoundError(get_error_message("job_not_found"))
    return job


def list_jobs(
    *,
    jobs,
    viewer: dict | None,
    page: int = 1,
    limit: int = 10,
    mine: bool = False,
    status: str | None = None,
) -> dict:
    owner_id = None
    if mine:
        if viewer is None:
            raise UnauthorizedError(get_error_message("unauthorized"))
        if viewer.get("role") != "hr":
            raise ForbiddenError("Recruiter access only")
        owner_id = int(viewer.get("sub"))

    status_filter = validate_choice(status, "status", JOB_STATUSES) if status and status != "all" else None
    rows, total = jobs.list_jobs(
        owner_id=owner_id,
        public_only=not mine,
        status=status_filter,
        skip=(page - 1) * limit,
        limit=limit,
    )
    return {
        "jobs": [job_to_public(j) for j in rows],
        "pagination": {
            "page": page,
            "pages": math.ceil(total / limit),
            "total": total,
            "limit": limit,
        },
    }
