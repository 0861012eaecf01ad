"""
Application error taxonomy and user-facing messages.

Services raise these; the handlers registered in ``main.py`` turn them into
``{"success": false, "error": ...}`` responses.
"""
from fastapi.responses import JSONResponse



class AppError(Exception):
    """Base application error."""
    def __init__(self, message: str, status_code: int = 500, details: dict | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class InvalidStatusError(ValidationError):
    def __init__(self, message: str = "Invalid status", details: dict | None = None):
        super().__init__(message, details=details)


class DuplicateEmailError(AppError):
    def __init__(self, message: str = "User with this email already exists", details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""
    def __init__(self, message: str = "Unauthorized", details: dict | None = None):
        super().__init__(message, status_code=401, details=details)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Access forbidden", details: dict | None = None):
        super().__init__(message, status_code=403, details=details)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class NotFoundOrUnauthorizedError(NotFoundError):
    """Raised both when a job is missing and when it belongs to someone else."""
    def __init__(self, message: str = "Job not found or unauthorized", details: dict | None = None):
        super().__init__(message, details=details)


class ApplicationNotFoundError(NotFoundError):
    def __init__(self, message: str = "Application not found", details: dict | None = None):
        super().__init__(message, details=details)


class FileTooLargeError(AppError):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=413, details=details)


ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid email or password",
    "no_password": "Account exists but no password set. Please contact support.",
    "account_disabled": "This account has been disabled",
    "email_exists": "User with this email already exists",
    "unauthorized": "Unauthorized",
    "forbidden": "You don't have permission to access this resource.",

    # Jobs / applications
    "job_not_found": "Job not found",
    "job_not_found_or_unauthorized": "Job not found or unauthorized",
    "job_inactive": "Job not found or no longer active",
    "application_not_found": "Application not found",
    "invalid_status": "Invalid status",

    # Files
    "file_not_found": "File not found",
    "file_id_required": "File ID required",
    "invalid_file_type": "Invalid file type. Please upload a PDF, DOCX or plain text file.",

    # General
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content
    )
