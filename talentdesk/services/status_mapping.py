"""
Submission status vocabularies.

Clients speak the external vocabulary (``pending`` ...); rows store the
internal one (``new`` ...). ``pending <-> new`` is the only renaming.
"""
from ..utils.error_handlers import InvalidStatusError, get_error_message

EXTERNAL_TO_INTERNAL = {
    "pending": "new",
    "reviewed": "reviewed",
    "shortlisted": "shortlisted",
    "rejected": "rejected",
}
INTERNAL_TO_EXTERNAL = {internal: external for external, internal in EXTERNAL_TO_INTERNAL.items()}

EXTERNAL_STATUSES = tuple(EXTERNAL_TO_INTERNAL)
INTERNAL_STATUSES = tuple(INTERNAL_TO_EXTERNAL)

ALL_STATUSES = "all"


def to_internal_status(external: str | None) -> str:
    internal = EXTERNAL_TO_INTERNAL.get(external) if isinstance(external, str) else None
    if internal is None:
        raise InvalidStatusError(get_error_message("invalid_status"))
    return internal


def to_external_status(internal: str | None) -> str | None:
    return "pending" if internal == "new" else internal


def resolve_status_filter(status: str | None) -> str | None:
    """None means no filter. External names are translated; anything else is matched verbatim."""
    if status is None or status == "" or status == ALL_STATUSES:
        return None
    return EXTERNAL_TO_INTERNAL.get(status, status)
