from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import JobRepository, ResumeProfileRepository, UserRepository
from ..schemas.resume import ResumeSaveRequest
from ..services.applicant_dashboard import save_resume_version
from ..utils.dependencies import caller_id
from ..utils.roles import applicant_only

router = APIRouter(prefix="/api/resume", tags=["Resume"])


@router.post("/save", status_code=201)
def save_resume(
    payload: ResumeSaveRequest,
    db: Session = Depends(get_db),
    user=Depends(applicant_only),
):
    return save_resume_version(
        users=UserRepository(db),
        profiles=ResumeProfileRepository(db),
        jobs=JobRepository(db),
        actor_id=caller_id(user),
        resume_data=payload.resume_data,
        ats_score=payload.ats_score,
        job_id=payload.job_id,
    )
