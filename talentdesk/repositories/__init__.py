"""Typed query objects over the SQLAlchemy session.

Services depend on these methods only, so they can be exercised against
in-memory fakes as well as a real database.
"""
from .applicants import ApplicantRepository
from .jobs import JobRepository
from .resume_profiles import ResumeProfileRepository
from .submissions import SubmissionRepository
from .users import UserRepository

__all__ = [
    "ApplicantRepository",
    "JobRepository",
    "ResumeProfileRepository",
    "SubmissionRepository",
    "UserRepository",
]
