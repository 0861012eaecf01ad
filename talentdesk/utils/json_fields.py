"""Helpers for the JSON payloads stored in Text columns."""
import json
import logging
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)


def load_json(raw: Any, default: Any = None) -> Any:
    if raw is None:
        return default
    if isinstance(raw, (dict, list)):
        return raw
    if isinstance(raw, str):
        s = raw.strip()
        if not s:
            return default
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed JSON column value")
            return default
    return default


def dump_json(value: Any) -> str | None:
    if value is None:
        return None
    return json.dumps(value, default=str)


def load_string_list(raw: Any) -> list[str]:
    parsed = load_json(raw, default=[])
    if not isinstance(parsed, list):
        return []
    return [str(x).strip() for x in parsed if str(x).strip()]


def isoformat(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value
