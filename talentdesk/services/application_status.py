import logging
from datetime import datetime, timezone

from ..utils.error_handlers import (
    ApplicationNotFoundError,
    NotFoundOrUnauthorizedError,
    get_error_message,
)
from .application_listing import application_to_public
from .status_mapping import to_internal_status

logger = logging.getLogger(__name__)


def update_application_status(
    *,
    jobs,
    submissions,
    actor_id: int,
    slug: str,
    application_id: int,
    status: str | None,
    now: datetime | None = None,
) -> dict:
    """
    Move one application to a new status on behalf of the job's recruiter.

    Plain read-then-write with no version check: concurrent updates to the
    same application are last-write-wins.
    """
    internal = to_internal_status(status)

    job = jobs.find_job_by_slug_and_owner(slug, actor_id)
    if job is None:
        logger.warning("Status update denied: job %r not found for user %s", slug, actor_id)
        raise NotFoundOrUnauthorizedError(get_error_message("job_not_found_or_unauthorized"))

    submission = submissions.find_submission_by_id_and_job(application_id, job.id)
    if submission is None:
        raise ApplicationNotFoundError(get_error_message("application_not_found"))

    previous = submission.status
    submission = submissions.update_status(submission, internal, now or datetime.now(timezone.utc))
    logger.info(
        "Application %s on job %s moved %s -> %s by user %s",
        submission.id, job.id, previous, internal, actor_id,
    )
    return application_to_public(submission)
