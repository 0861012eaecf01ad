from .applicant import Applicant
from .job import Job
from .resume import ResumeProfile
from .submission import Submission
from .user import User

__all__ = ["Applicant", "Job", "ResumeProfile", "Submission", "User"]
