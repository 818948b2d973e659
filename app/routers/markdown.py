"""Markdown processing endpoints: live preview and stored-file rendering."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import PREVIEW_RATE_LIMIT
from app.dependencies import get_processor
from app.errors import ConversionError, StorageError, StoredFileNotFoundError, UnsafePathError
from app.models.processed_content import ProcessedContent
from app.models.request import PreviewRequest, ProcessFileRequest
from app.models.response import ProcessMarkdownResponse
from app.services.processor import MarkdownProcessor

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter()


@router.post(
    "/markdown/preview",
    response_model=ProcessMarkdownResponse,
    summary="Render itinerary markdown without storing it",
)
@limiter.limit(PREVIEW_RATE_LIMIT)
def preview_markdown(
    request: Request,
    body: PreviewRequest,
    processor: MarkdownProcessor = Depends(get_processor),
) -> ProcessMarkdownResponse:
    """Convert ``markdown`` to sanitized HTML and infer its title and description."""
    try:
        content = processor.process(body.markdown)
    except ConversionError as exc:
        logger.error("Preview conversion failed: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return _to_response(content)


@router.post(
    "/process-markdown",
    response_model=ProcessMarkdownResponse,
    summary="Render a stored itinerary file",
)
def process_markdown(
    body: ProcessFileRequest,
    processor: MarkdownProcessor = Depends(get_processor),
) -> ProcessMarkdownResponse:
    """Load ``file_path`` from storage and return its processed content.

    * ``404`` – nothing is stored at ``file_path``.
    * ``400`` – ``file_path`` points outside the storage root.
    * ``422`` – the markdown could not be converted.
    """
    logger.info("Process request received", extra={"file_path": body.file_path})
    try:
        content = processor.process_stored_file(body.file_path)
    except StoredFileNotFoundError as exc:
        logger.warning("Stored file not found: %s", body.file_path)
        raise HTTPException(status_code=404, detail=str(exc))
    except UnsafePathError as exc:
        logger.warning("Rejected unsafe path: %s", body.file_path)
        raise HTTPException(status_code=400, detail=str(exc))
    except StorageError as exc:
        logger.error("Storage error reading %s: %s", body.file_path, exc)
        raise HTTPException(status_code=500, detail=f"Failed to read file: {exc}")
    except ConversionError as exc:
        logger.error("Conversion failed for %s: %s", body.file_path, exc)
        raise HTTPException(status_code=422, detail=str(exc))
    return _to_response(content)


def _to_response(content: ProcessedContent) -> ProcessMarkdownResponse:
    return ProcessMarkdownResponse(
        title=content.title,
        description=content.description,
        html_content=content.html_content,
        internal_images=list(content.internal_images),
    )
