import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse

from .. import config
from ..services.file_store import find_file, list_files, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["Files"])


@router.post("", status_code=201)
def upload_file(file: UploadFile = File(...)):
    # Anonymous uploads are allowed; applicants apply without an account.
    return save_upload(file, config.UPLOAD_DIR)


@router.get("")
def get_files():
    files = list_files(config.UPLOAD_DIR)
    return {"success": True, "files": files, "count": len(files)}


@router.get("/{file_id}")
def get_file(file_id: str):
    path, content_type = find_file(config.UPLOAD_DIR, file_id)
    return FileResponse(
        path,
        media_type=content_type,
        headers={"Content-Disposition": f'inline; filename="{path.name}"'},
    )
