from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories.applicants import ApplicantRepository
from ..repositories.jobs import JobRepository
from ..repositories.submissions import SubmissionRepository
from ..schemas.submission import SubmissionCreate
from ..services.submissions import submit_application

router = APIRouter(prefix="/api/submissions", tags=["Submissions"])


@router.post("", status_code=201)
def create_submission(payload: SubmissionCreate, db: Session = Depends(get_db)):
    return submit_application(
        jobs=JobRepository(db),
        submissions=SubmissionRepository(db),
        applicants=ApplicantRepository(db),
        job_slug=payload.job_slug,
        applicant_name=payload.applicant_name,
        applicant_email=payload.applicant_email,
        applicant_phone=payload.applicant_phone,
        resume_text=payload.resume_text,
        file_url=payload.file_url,
        file_name=payload.file_name,
        file_type=payload.file_type,
        create_profile=payload.create_profile,
        ats_score=payload.ats_score,
        parsed_resume_data=payload.parsed_resume_data,
        analysis=payload.analysis,
    )
