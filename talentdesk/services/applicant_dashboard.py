"""
Applicant-side views: the personal dashboard and saving resume versions.

Versions live as a JSON list on the account's resume profile. Versions
collected while applying as a guest (``Applicant`` rows keyed by email) are
shown alongside them.
"""
import json
import logging
import math
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from ..utils.error_handlers import NotFoundError, ValidationError, get_error_message
from ..utils.json_fields import isoformat, load_json
from .status_mapping import to_external_status

logger = logging.getLogger(__name__)

UNKNOWN_JOB = "Unknown Job"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _as_job_id(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _load_user(users, actor_id: int):
    user = users.get(actor_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _version_to_public(version: dict, titles: dict[int, str]) -> dict:
    scores = []
    for entry in version.get("atsScores") or []:
        job_id = _as_job_id(entry.get("jobId"))
        scores.append({
            "jobId": job_id,
            "jobTitle": titles.get(job_id, UNKNOWN_JOB),
            "score": entry.get("score") or 0,
            "keywordsMatched": list(entry.get("keywordsMatched") or []),
            "skillsMatched": list(entry.get("skillsMatched") or []),
            "createdAt": entry.get("createdAt"),
        })
    return {
        "id": version.get("id"),
        "parsedText": version.get("parsedText"),
        "rawFileURL": version.get("rawFileURL"),
        "fileName": version.get("fileName"),
        "fileType": version.get("fileType"),
        "atsScores": scores,
        "createdAt": version.get("createdAt"),
    }


def _application_to_public(submission) -> dict:
    job = submission.job
    return {
        "id": submission.id,
        "jobId": submission.job_id,
        "jobSlug": getattr(job, "slug", None),
        "jobTitle": getattr(job, "title", None) or UNKNOWN_JOB,
        "atsScore": submission.ats_score or 0,
        "status": to_external_status(submission.status),
        "submittedAt": isoformat(submission.submitted_at),
    }


def get_dashboard(*, users, profiles, applicants, jobs, submissions, actor_id: int) -> dict:
    """
    Stats, resume versions and applications for the calling applicant.

    Applications are matched by the account email or by the guest applicant
    record sharing that email. ``averageScore`` averages every per-job score on
    the versions together with every non-zero application score.
    ``responseRate`` is the percentage of applications a recruiter has moved
    out of ``pending``.
    """
    user = _load_user(users, actor_id)

    profile = profiles.find_by_user(user.id)
    versions = list(load_json(getattr(profile, "resume_versions", None), default=[]) or [])
    guest = applicants.find_by_email(user.email)
    if guest is not None:
        versions.extend(load_json(guest.resume_versions, default=[]) or [])
    versions = [v for v in versions if isinstance(v, dict)]

    rows = submissions.list_for_applicant(
        email=user.email,
        applicant_id=guest.id if guest is not None else None,
    )

    job_ids = {
        _as_job_id(entry.get("jobId"))
        for version in versions
        for entry in version.get("atsScores") or []
    }
    job_ids.discard(None)
    titles = jobs.titles_for(job_ids)

    scores = [
        entry.get("score") or 0
        for version in versions
        for entry in version.get("atsScores") or []
    ]
    scores.extend(s.ats_score for s in rows if s.ats_score)
    average = _round_half_up(sum(scores) / len(scores)) if scores else 0

    responded = sum(1 for s in rows if s.status != "new")
    response_rate = _round_half_up(100 * responded / len(rows)) if rows else 0

    return {
        "stats": {
            "totalResumes": len(versions),
            "averageScore": average,
            "totalApplications": len(rows),
            "responseRate": response_rate,
        },
        "resumeVersions": [_version_to_public(v, titles) for v in versions],
        "applications": [_application_to_public(s) for s in rows],
    }


def save_resume_version(
    *,
    users,
    profiles,
    jobs,
    actor_id: int,
    resume_data: dict | None,
    ats_score: float | None = None,
    job_id: int | None = None,
    now: datetime | None = None,
) -> dict:
    """Append a resume version to the caller's profile, optionally scored against one job."""
    if not isinstance(resume_data, dict) or not resume_data:
        raise ValidationError("Resume data is required")
    if ats_score is not None and not 0 <= ats_score <= 100:
        raise ValidationError("ATS score must be between 0 and 100")

    user = _load_user(users, actor_id)
    if job_id is not None and jobs.get(job_id) is None:
        raise NotFoundError(get_error_message("job_not_found"))

    now = now or datetime.now(timezone.utc)
    parsed_text = resume_data.get("parsedText")
    if not isinstance(parsed_text, str) or not parsed_text.strip():
        parsed_text = json.dumps(resume_data, default=str)

    ats_scores = []
    if job_id is not None and ats_score:
        ats_scores.append({
            "jobId": int(job_id),
            "score": float(ats_score),
            "keywordsMatched": [],
            "skillsMatched": [],
            "createdAt": now.isoformat(),
        })

    version = {
        "id": uuid4().hex,
        "parsedText": parsed_text,
        "rawFileURL": resume_data.get("rawFileURL"),
        "fileName": resume_data.get("fileName"),
        "fileType": resume_data.get("fileType"),
        "atsScores": ats_scores,
        "createdAt": now.isoformat(),
    }
    profile = profiles.append_version(user.id, version)
    total = len(load_json(profile.resume_versions, default=[]) or [])
    logger.info("User %s saved resume version %s (%d stored)", user.id, version["id"], total)

    return {"success": True, "resumeVersion": version}
