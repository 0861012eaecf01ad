from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..models.applicant import Applicant
from ..models.job import Job
from ..models.submission import Submission


class SubmissionRepository:
    def __init__(self, db: Session):
        self.db = db

    def _for_job(self, job_id: int, status: str | None):
        q = self.db.query(Submission).filter(Submission.job_id == int(job_id))
        if status is not None:
            q = q.filter(Submission.status == status)
        return q

    def find_submission_by_id_and_job(self, application_id: int, job_id: int) -> Submission | None:
        return (
            self.db.query(Submission)
            .options(joinedload(Submission.applicant))
            .filter(Submission.id == int(application_id), Submission.job_id == int(job_id))
            .first()
        )

    def list_for_job(self, job_id: int, *, status: str | None, skip: int, limit: int) -> list[Submission]:
        """Best score first; equal scores newest first."""
        return (
            self._for_job(job_id, status)
            .options(joinedload(Submission.applicant))
            .order_by(
                func.coalesce(Submission.ats_score, 0).desc(),
                Submission.submitted_at.desc(),
                Submission.id.desc(),
            )
            .offset(skip)
            .limit(limit)
            .all()
        )

    def list_for_applicant(self, *, email: str, applicant_id: int | None = None) -> list[Submission]:
        """Submissions made under this email or linked to this applicant record, newest first."""
        match = Submission.applicant_email == email
        if applicant_id is not None:
            match = or_(match, Submission.applicant_id == int(applicant_id))
        return (
            self.db.query(Submission)
            .options(joinedload(Submission.job))
            .filter(match)
            .order_by(Submission.submitted_at.desc(), Submission.id.desc())
            .all()
        )

    def count_for_job(self, job_id: int, *, status: str | None) -> int:
        return self._for_job(job_id, status).count()

    def update_status(self, submission: Submission, status: str, updated_at: datetime) -> Submission:
        submission.status = status
        submission.updated_at = updated_at
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(submission)
        return submission

    def create(self, submission: Submission, *, job: Job, applicant: Applicant | None = None) -> Submission:
        """Insert the submission (and a new applicant, if any) and bump the job counter in one commit."""
        try:
            if applicant is not None:
                self.db.add(applicant)
                self.db.flush()
                submission.applicant_id = applicant.id
            self.db.add(submission)
            self.db.query(Job).filter(Job.id == job.id).update(
                {Job.application_count: Job.application_count + 1},
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(submission)
        return submission
