import json

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.resume import ResumeProfile
from ..utils.json_fields import load_json


class ResumeProfileRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_user(self, user_id: int) -> ResumeProfile | None:
        return self.db.query(ResumeProfile).filter(ResumeProfile.user_id == int(user_id)).first()

    def append_version(self, user_id: int, version: dict) -> ResumeProfile:
        """Append to the user's version history, creating the profile on first save."""
        profile = self.find_by_user(user_id)
        try:
            if profile is None:
                profile = ResumeProfile(user_id=int(user_id), is_anonymous=False, resume_versions="[]")
                self.db.add(profile)
            versions = load_json(profile.resume_versions, default=[]) or []
            versions.append(version)
            profile.resume_versions = json.dumps(versions, default=str)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(profile)
        return profile
