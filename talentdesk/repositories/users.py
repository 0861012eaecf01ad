from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.resume import ResumeProfile
from ..models.user import User


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def get(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == int(user_id)).first()

    def create_with_profile(self, user: User, *, with_resume_profile: bool) -> User:
        """
        Insert the user and, when requested, its empty resume profile in a single
        transaction. Any failure rolls back both rows.
        """
        try:
            self.db.add(user)
            self.db.flush()
            if with_resume_profile:
                self.db.add(ResumeProfile(user_id=user.id, is_anonymous=False, resume_versions="[]"))
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def touch_last_login(self, user: User, when: datetime) -> None:
        user.last_login = when
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
