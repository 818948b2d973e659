import logging
import logging.config
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import FILE_STORAGE_BASE_DIR, LOG_LEVEL, STORAGE_BACKEND
from app.routers.files import router as files_router
from app.routers.markdown import limiter, router as markdown_router
from app.services.processor import MarkdownProcessor
from app.services.storage import FileStorage, create_storage

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": LOG_LEVEL, "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)


def create_app(storage: Optional[FileStorage] = None) -> FastAPI:
    """Build the API with its storage backend and markdown processor.

    When *storage* is omitted the backend named by ``TRIPFLOW_STORAGE_BACKEND``
    is created.
    """
    if storage is None:
        storage = create_storage(STORAGE_BACKEND, FILE_STORAGE_BASE_DIR)

    app = FastAPI(
        title="Tripflow – Itinerary Markdown API",
        description="Stores markdown trip plans and renders them as sanitized HTML.",
        version="1.0.0",
    )

    app.state.storage = storage
    app.state.processor = MarkdownProcessor(storage)

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})

    app.include_router(markdown_router)
    app.include_router(files_router)

    @app.get("/", summary="Health check")
    async def root() -> dict:
        return {"message": "Hello from Tripflow"}

    logger.info("Tripflow API ready (storage=%s)", type(storage).__name__)
    return app


app = create_app()
