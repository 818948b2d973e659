"""Itinerary file upload and removal."""

import logging
import os

from fastapi import APIRouter, Depends, File, HTTPException, Request, Response, UploadFile

from app.config import ALLOWED_UPLOAD_EXTS, MAX_UPLOAD_SIZE, UPLOAD_RATE_LIMIT
from app.dependencies import get_storage
from app.errors import StorageError, StoredFileNotFoundError, UnsafePathError
from app.models.response import UploadFileResponse
from app.routers.markdown import limiter
from app.services.storage import FileStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["Files"])


@router.post("/upload", response_model=UploadFileResponse, summary="Upload a markdown itinerary")
@limiter.limit(UPLOAD_RATE_LIMIT)
def upload_file(
    request: Request,
    file: UploadFile = File(..., description="Markdown file (.md or .markdown)."),
    storage: FileStorage = Depends(get_storage),
) -> UploadFileResponse:
    filename = file.filename or ""
    ext = os.path.splitext(filename)[1].lower()
    if ext not in ALLOWED_UPLOAD_EXTS:
        raise HTTPException(
            status_code=400,
            detail="Only markdown files (.md, .markdown) are allowed.",
        )

    # Read one byte past the limit so oversized uploads are detected without
    # buffering the whole body.
    data = file.file.read(MAX_UPLOAD_SIZE + 1)
    if len(data) > MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"File size must be at most {MAX_UPLOAD_SIZE} bytes.",
        )
    if not data:
        raise HTTPException(status_code=400, detail="File is empty.")

    try:
        file_path = storage.put_file(data, filename, file.content_type or "")
        info = storage.get_file_info(file_path)
    except StorageError as exc:
        logger.error("Upload of %s failed: %s", filename, exc)
        raise HTTPException(status_code=500, detail=f"Failed to upload file: {exc}")

    logger.info("File uploaded", extra={"file_path": file_path, "size": info.size})
    return UploadFileResponse(
        file_path=file_path,
        filename=filename,
        size=info.size,
        mime_type=info.mime_type,
    )


@router.delete("/{file_path:path}", status_code=204, summary="Delete a stored itinerary")
def delete_file(file_path: str, storage: FileStorage = Depends(get_storage)) -> Response:
    try:
        storage.delete_file(file_path)
    except StoredFileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except UnsafePathError as exc:
        logger.warning("Rejected unsafe delete path: %s", file_path)
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        logger.error("Delete of %s failed: %s", file_path, exc)
        raise HTTPException(status_code=500, detail=str(exc))
    return Response(status_code=204)
