"""Public intake of job applications."""
import json
import logging
from datetime import datetime, timezone
from uuid import uuid4

from ..models.applicant import Applicant
from ..models.submission import Submission
from ..utils.error_handlers import NotFoundError, ValidationError, get_error_message
from ..utils.json_fields import dump_json, load_json
from ..utils.validation import validate_email, validate_string_field
from .status_mapping import to_external_status

logger = logging.getLogger(__name__)

_FILE_URL_PREFIXES = ("http://", "https://", "/api/files/")


def _validate_score(value: float | None) -> float:
    if value is None:
        return 0.0
    if not 0 <= value <= 100:
        raise ValidationError("ATS score must be between 0 and 100")
    return float(value)


def _resume_version(
    *,
    resume_text: str,
    file_url: str | None,
    file_name: str | None,
    file_type: str | None,
    job_id: int,
    ats_score: float,
    parsed: dict | None,
    analysis: dict | None,
    now: datetime,
) -> dict:
    skills = list((analysis or {}).get("skillsMatched") or [])
    return {
        "id": uuid4().hex,
        "parsedText": resume_text,
        "rawFileURL": file_url,
        "fileName": file_name,
        "fileType": file_type,
        "atsScores": [
            {
                "jobId": job_id,
                "score": ats_score,
                "keywordsMatched": skills,
                "skillsMatched": skills,
                "experienceYears": (parsed or {}).get("totalExperienceYears", 0),
                "createdAt": now.isoformat(),
            }
        ],
        "createdAt": now.isoformat(),
    }


def submit_application(
    *,
    jobs,
    submissions,
    applicants,
    job_slug: str | None,
    applicant_name: str | None,
    applicant_email: str | None,
    applicant_phone: str | None = None,
    resume_text: str | None = None,
    file_url: str | None = None,
    file_name: str | None = None,
    file_type: str | None = None,
    create_profile: bool = False,
    ats_score: float | None = None,
    parsed_resume_data: dict | None = None,
    analysis: dict | None = None,
    now: datetime | None = None,
) -> dict:
    slug = validate_string_field(job_slug, "Job slug", max_length=255)
    name = validate_string_field(applicant_name, "Applicant name", max_length=100)
    email = validate_email(applicant_email)
    phone = validate_string_field(applicant_phone, "Phone", max_length=50, required=False)
    text = (resume_text or "").strip()
    url = (file_url or "").strip() or None

    if not text and not url:
        raise ValidationError("Either resume text or file URL must be provided")
    if url and not url.startswith(_FILE_URL_PREFIXES):
        raise ValidationError("File URL must be a valid URL")
    score = _validate_score(ats_score)

    job = jobs.find_active_by_slug(slug)
    if job is None:
        raise NotFoundError(get_error_message("job_inactive"))

    # Text extraction from uploaded files happens upstream.
    if not text:
        raise ValidationError("Resume text must be provided")

    now = now or datetime.now(timezone.utc)

    applicant = None
    if create_profile:
        version = _resume_version(
            resume_text=text,
            file_url=url,
            file_name=file_name,
            file_type=file_type,
            job_id=job.id,
            ats_score=score,
            parsed=parsed_resume_data,
            analysis=analysis,
            now=now,
        )
        applicant = applicants.find_by_email(email)
        if applicant is None:
            applicant = Applicant(
                name=name,
                email=email,
                phone=phone,
                is_anonymous=False,
                resume_versions=json.dumps([version]),
            )
        else:
            versions = load_json(applicant.resume_versions, default=[]) or []
            versions.append(version)
            applicant.resume_versions = json.dumps(versions)

    submission = Submission(
        job_id=job.id,
        applicant_name=name,
        applicant_email=email,
        applicant_phone=phone,
        uploaded_file_url=url,
        file_name=file_name,
        file_type=file_type,
        raw_resume_text=text,
        parsed_resume_data=dump_json(parsed_resume_data),
        analysis=dump_json(analysis),
        ats_score=score,
        status="new",
        submitted_at=now,
        updated_at=now,
    )
    submission = submissions.create(submission, job=job, applicant=applicant)
    logger.info("New application %s for job %s", submission.id, job.id)

    return {
        "message": "Resume submitted successfully",
        "submission": {
            "id": submission.id,
            "atsScore": submission.ats_score or 0,
            "status": to_external_status(submission.status),
            "analysis": load_json(submission.analysis, default=None),
        },
        "jobTitle": job.title,
    }
