"""
Local resume file storage.

Upload limits mirror the hosted upload integration used by the frontend:
PDF and DOCX up to 4MB, plain text up to 2MB, one file per request.
Stored names are ``<uuid hex><ext>``; the part before the first dot is the
file id.
"""
import logging
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

from ..utils.error_handlers import (
    FileTooLargeError,
    NotFoundError,
    ValidationError,
    get_error_message,
)
from ..utils.validation import sanitize_filename

logger = logging.getLogger(__name__)

MB = 1024 * 1024
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

UPLOAD_RULES = {
    ".pdf": {"content_types": {"application/pdf"}, "max_bytes": 4 * MB, "label": "4MB"},
    ".docx": {
        # some browsers send msword for docx
        "content_types": {DOCX_CONTENT_TYPE, "application/msword"},
        "max_bytes": 4 * MB,
        "label": "4MB",
    },
    ".txt": {"content_types": {"text/plain"}, "max_bytes": 2 * MB, "label": "2MB"},
}
_GENERIC_CONTENT_TYPES = {"application/octet-stream"}

CONTENT_TYPES_BY_EXT = {
    ".pdf": "application/pdf",
    ".docx": DOCX_CONTENT_TYPE,
    ".doc": "application/msword",
    ".txt": "text/plain",
}

CHUNK_BYTES = 1024 * 1024


def file_id_of(file_name: str) -> str:
    return file_name.split(".")[0]


def _iso_utc(ts: float) -> str:
    return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()


def save_upload(file: UploadFile, upload_dir: str) -> dict:
    """Copy an upload to disk. Blocking; the router runs it as a plain ``def`` endpoint."""
    if not file or not file.filename:
        raise ValidationError(get_error_message("invalid_file_type"))

    original_name = sanitize_filename(Path(file.filename).name)
    ext = Path(original_name).suffix.lower()
    rule = UPLOAD_RULES.get(ext)
    if rule is None:
        raise ValidationError(get_error_message("invalid_file_type"))

    content_type = (file.content_type or "").split(";")[0].strip().lower()
    if content_type and content_type not in rule["content_types"] | _GENERIC_CONTENT_TYPES:
        raise ValidationError(get_error_message("invalid_file_type"))

    base_dir = Path(upload_dir)
    base_dir.mkdir(parents=True, exist_ok=True)

    file_id = uuid4().hex
    stored_name = f"{file_id}{ext}"
    dest = base_dir / stored_name

    size = 0
    try:
        with open(dest, "wb") as out:
            while True:
                chunk = file.file.read(CHUNK_BYTES)
                if not chunk:
                    break
                size += len(chunk)
                if size > rule["max_bytes"]:
                    raise FileTooLargeError(f"File is too large. Maximum size for {ext} files is {rule['label']}.")
                out.write(chunk)
    except Exception:
        # Never leave a partial file behind.
        dest.unlink(missing_ok=True)
        raise
    finally:
        file.file.close()

    logger.info("Stored upload %s (%d bytes)", stored_name, size)
    return {
        "success": True,
        "fileId": file_id,
        "fileName": stored_name,
        "originalName": original_name,
        "size": size,
        "type": CONTENT_TYPES_BY_EXT[ext],
        "url": f"/api/files/{file_id}",
    }


def list_files(upload_dir: str) -> list[dict]:
    """Stat every regular file in the upload directory. A missing directory is empty."""
    base_dir = Path(upload_dir)
    if not base_dir.is_dir():
        return []

    files = []
    for entry in sorted(base_dir.iterdir(), key=lambda p: p.name):
        if not entry.is_file():
            continue
        stats = entry.stat()
        # st_birthtime is not available on every platform
        created = getattr(stats, "st_birthtime", None) or stats.st_ctime
        files.append(
            {
                "fileId": file_id_of(entry.name),
                "fileName": entry.name,
                "size": stats.st_size,
                "uploadedAt": _iso_utc(created),
                "modifiedAt": _iso_utc(stats.st_mtime),
            }
        )
    return files


def find_file(upload_dir: str, file_id: str | None) -> tuple[Path, str]:
    """Return the path and content type of the first stored file whose name starts with ``file_id``."""
    if not file_id or not file_id.strip():
        raise ValidationError(get_error_message("file_id_required"))

    file_id = file_id.strip()
    if sanitize_filename(file_id) != file_id:
        raise NotFoundError(get_error_message("file_not_found"))

    base_dir = Path(upload_dir)
    if base_dir.is_dir():
        for entry in sorted(base_dir.iterdir(), key=lambda p: p.name):
            if entry.is_file() and entry.name.startswith(file_id):
                content_type = CONTENT_TYPES_BY_EXT.get(entry.suffix.lower(), "application/octet-stream")
                return entry, content_type

    raise NotFoundError(get_error_message("file_not_found"))
