from fastapi import Depends

from .dependencies import get_current_user
from .error_handlers import ForbiddenError


def _role_required(required_role: str, label: str):
    def check_role(user=Depends(get_current_user)):
        if user.get("role") != required_role:
            raise ForbiddenError(f"{label} access only")
        return user
    return check_role


recruiter_only = _role_required("hr", "Recruiter")
applicant_only = _role_required("applicant", "Applicant")
