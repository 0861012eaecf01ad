"""
Input validation helpers. Each raises ``ValidationError`` carrying the first
rule the value breaks.
"""
import re
from typing import Any

from .error_handlers import ValidationError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

VALID_ROLES = ("hr", "applicant")
JOB_STATUSES = ("active", "paused", "closed")
EXPERIENCE_LEVELS = ("entry", "mid", "senior", "executive")


def validate_email(email: Any) -> str:
    """Validate email shape and return it trimmed and lowercased."""
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")

    email = email.strip().lower()
    if len(email) > 255:
        raise ValidationError("Email too long (max 255 characters)")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email address")

    return email


def validate_password(password: Any) -> str:
    if not isinstance(password, str):
        raise ValidationError("Password is required")

    if len(password) < 6:
        raise ValidationError("Password must be at least 6 characters")

    # bcrypt only looks at the first 72 bytes
    if len(password.encode("utf-8")) > 72:
        raise ValidationError("Password must be 72 bytes or less")

    return password


def validate_string_field(
    value: Any,
    field_name: str,
    min_length: int = 1,
    max_length: int = 1000,
    required: bool = True,
) -> str | None:
    """Validate a string field with common rules."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required")
        return None

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")

    value = value.strip()

    if required and not value:
        raise ValidationError(f"{field_name} is required")

    if value and len(value) < min_length:
        raise ValidationError(f"{field_name} must be at least {min_length} characters")

    if len(value) > max_length:
        raise ValidationError(f"{field_name} must not exceed {max_length} characters")

    return value or None


def validate_role(role: Any) -> str:
    """Validate user role; absent means applicant."""
    if role is None or (isinstance(role, str) and not role.strip()):
        return "applicant"

    if not isinstance(role, str):
        raise ValidationError("Invalid role")

    role = role.strip().lower()
    if role not in VALID_ROLES:
        raise ValidationError(f"Invalid role. Must be one of: {', '.join(VALID_ROLES)}")

    return role


def validate_choice(value: str | None, field_name: str, choices: tuple[str, ...], default: str | None = None) -> str | None:
    if value is None or not value.strip():
        return default

    value = value.strip().lower()
    if value not in choices:
        raise ValidationError(f"Invalid {field_name}. Must be one of: {', '.join(choices)}")

    return value


def sanitize_filename(filename: str) -> str:
    """Sanitize filename to prevent directory traversal and other attacks."""
    if not filename:
        raise ValidationError("Filename is required")

    # Remove any path separators
    filename = filename.replace("/", "_").replace("\\", "_")

    # Remove any null bytes
    filename = filename.replace("\x00", "")

    # Remove directory traversal sequences
    filename = filename.replace("..", "_")

    # Remove leading dots to prevent hidden files
    filename = filename.lstrip(".")

    if len(filename) > 255:
        raise ValidationError("Filename too long")

    if not filename or filename == "_":
        raise ValidationError("Invalid filename")

    return filename
