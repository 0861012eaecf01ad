from sqlalchemy.orm import Session

from ..models.applicant import Applicant


class ApplicantRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> Applicant | None:
        return self.db.query(Applicant).filter(Applicant.email == email).first()
