from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .error_handlers import UnauthorizedError, get_error_message
from .jwt import decode_access_token

_bearer = HTTPBearer(auto_error=False)


def _claims_from(credentials: HTTPAuthorizationCredentials | None) -> dict | None:
    """Decoded claims, or None unless the token is valid and ``sub`` is a user id."""
    if credentials is None or not credentials.credentials:
        return None

    payload = decode_access_token(credentials.credentials)
    if not payload or not payload.get("sub"):
        return None

    try:
        int(payload["sub"])
    except (TypeError, ValueError):
        return None
    return payload


def get_current_user(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> dict:
    """Decode the bearer token into the caller's claims (``sub``, ``role``, ``company``)."""
    payload = _claims_from(credentials)
    if payload is None:
        raise UnauthorizedError(get_error_message("unauthorized"))
    return payload


def get_optional_user(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> dict | None:
    return _claims_from(credentials)


def caller_id(user: dict) -> int:
    return int(user["sub"])
