import logging
import math
from typing import Any

from ..utils.error_handlers import NotFoundOrUnauthorizedError, ValidationError, get_error_message
from ..utils.json_fields import isoformat, load_json
from .status_mapping import resolve_status_filter, to_external_status

logger = logging.getLogger(__name__)


def _first_present(*values: Any, default: Any) -> Any:
    for v in values:
        if v:
            return v
    return default


def application_to_public(submission) -> dict:
    """
    Response shape for one submission. Identity comes from the linked applicant
    account, then the denormalized fields on the submission, then placeholders.
    """
    applicant = getattr(submission, "applicant", None)
    analysis = load_json(getattr(submission, "analysis", None), default=None) or {}
    skills_matched = analysis.get("skillsMatched") if isinstance(analysis, dict) else None

    return {
        "id": submission.id,
        "name": _first_present(
            getattr(applicant, "name", None), submission.applicant_name, default="Anonymous"
        ),
        "email": _first_present(
            getattr(applicant, "email", None), submission.applicant_email, default=""
        ),
        "phone": _first_present(
            getattr(applicant, "phone", None), submission.applicant_phone, default=""
        ),
        "resumeUrl": submission.uploaded_file_url,
        "parsedResumeData": load_json(submission.parsed_resume_data, default=None),
        "atsScore": submission.ats_score or 0,
        "skillsMatched": list(skills_matched or []),
        "submittedAt": isoformat(submission.submitted_at),
        "updatedAt": isoformat(getattr(submission, "updated_at", None)),
        "status": to_external_status(submission.status),
    }


def list_applications(
    *,
    jobs,
    submissions,
    actor_id: int,
    slug: str,
    page: int = 1,
    limit: int = 10,
    status: str | None = None,
) -> dict:
    """One page of a job's submissions, visible only to the recruiter who owns the job."""
    if page < 1:
        raise ValidationError("Page must be at least 1")
    if limit < 1:
        raise ValidationError("Limit must be at least 1")

    job = jobs.find_job_by_slug_and_owner(slug, actor_id)
    if job is None:
        logger.warning("Listing denied: job %r not found for user %s", slug, actor_id)
        raise NotFoundOrUnauthorizedError(get_error_message("job_not_found_or_unauthorized"))

    status_filter = resolve_status_filter(status)
    skip = (page - 1) * limit

    total = submissions.count_for_job(job.id, status=status_filter)
    # Offsets past the last row never reach the database.
    rows = []
    if skip < total:
        rows = submissions.list_for_job(job.id, status=status_filter, skip=skip, limit=limit)

    return {
        "applications": [application_to_public(s) for s in rows],
        "pagination": {
            "page": page,
            "pages": math.ceil(total / limit),
            "total": total,
            "limit": limit,
        },
    }
