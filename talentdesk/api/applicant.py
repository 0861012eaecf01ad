from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import (
    ApplicantRepository,
    JobRepository,
    ResumeProfileRepository,
    SubmissionRepository,
    UserRepository,
)
from ..services.applicant_dashboard import get_dashboard
from ..utils.dependencies import caller_id
from ..utils.roles import applicant_only

router = APIRouter(prefix="/api/applicant", tags=["Applicant"])


@router.get("/dashboard")
def applicant_dashboard(db: Session = Depends(get_db), user=Depends(applicant_only)):
    return get_dashboard(
        users=UserRepository(db),
        profiles=ResumeProfileRepository(db),
        applicants=ApplicantRepository(db),
        jobs=JobRepository(db),
        submissions=SubmissionRepository(db),
        actor_id=caller_id(user),
    )
