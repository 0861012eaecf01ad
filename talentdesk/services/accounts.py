"""Registration and login."""
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from ..models.user import User
from ..utils.error_handlers import (
    DuplicateEmailError,
    UnauthorizedError,
    ValidationError,
    get_error_message,
)
from ..utils.jwt import create_access_token
from ..utils.security import hash_password, verify_password
from ..utils.json_fields import isoformat
from ..utils.validation import (
    validate_email,
    validate_password,
    validate_role,
    validate_string_field,
)

logger = logging.getLogger(__name__)


def user_to_public(user: User) -> dict:
    # The password hash is never part of a response.
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "company": user.company,
        "isActive": bool(user.is_active) if user.is_active is not None else True,
        "createdAt": isoformat(user.created_at),
    }


def validate_registration(
    *,
    name: str | None,
    email: str | None,
    password: str | None,
    company: str | None,
    role: str | None,
) -> dict:
    """Return normalized registration fields or raise on the first broken rule."""
    clean_name = validate_string_field(name, "Name", min_length=2, max_length=100)
    clean_email = validate_email(email)
    clean_role = validate_role(role)

    clean_company = None
    if clean_role == "hr":
        # Company is checked before password; only the first failure surfaces.
        if company is None or (isinstance(company, str) and not company.strip()):
            raise ValidationError("Company name is required for HR accounts")
        clean_company = validate_string_field(company, "Company name", min_length=2, max_length=255)
        if password is None or password == "":
            raise ValidationError("Password is required for HR accounts")
    elif company is not None:
        clean_company = validate_string_field(company, "Company name", min_length=2, max_length=255, required=False)

    clean_password = None
    if password is not None and password != "":
        clean_password = validate_password(password)

    return {
        "name": clean_name,
        "email": clean_email,
        "password": clean_password,
        "company": clean_company,
        "role": clean_role,
    }


def register_user(
    *,
    users,
    name: str | None,
    email: str | None,
    password: str | None = None,
    company: str | None = None,
    role: str | None = None,
) -> User:
    data = validate_registration(name=name, email=email, password=password, company=company, role=role)

    if users.find_by_email(data["email"]) is not None:
        logger.warning("Registration rejected: email already registered")
        raise DuplicateEmailError(get_error_message("email_exists"))

    user = User(
        name=data["name"],
        email=data["email"],
        password=hash_password(data["password"]) if data["password"] else None,
        company=data["company"],
        role=data["role"],
        is_active=True,
    )
    try:
        user = users.create_with_profile(user, with_resume_profile=data["role"] == "applicant")
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email.
        raise DuplicateEmailError(get_error_message("email_exists"))

    logger.info("Registered %s account %s", user.role, user.id)
    return user


def authenticate(*, users, email: str | None, password: str | None) -> dict:
    """Check credentials and issue a bearer token."""
    clean_email = validate_email(email)
    if not password:
        raise ValidationError("Password is required")

    user = users.find_by_email(clean_email)
    if user is None:
        raise UnauthorizedError(get_error_message("invalid_credentials"))

    if not user.password:
        raise UnauthorizedError(get_error_message("no_password"))

    if not verify_password(password, user.password):
        raise UnauthorizedError(get_error_message("invalid_credentials"))

    if user.is_active is False:
        raise UnauthorizedError(get_error_message("account_disabled"))

    users.touch_last_login(user, datetime.now(timezone.utc))

    token = create_access_token({"sub": str(user.id), "role": user.role, "company": user.company})
    return {
        "access_token": token,
        "token_type": "bearer",
        "user": user_to_public(user),
    }
