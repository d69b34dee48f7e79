"""FastAPI application entry point."""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import health_router, router
from .config import Settings, get_settings
from .database import ConnectionManager
from .errors import AnswerServiceError
from .middleware import CatchAllExceptionMiddleware
from .repository import AnswerRepository
from .storage import UploadStorage


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for this process."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


async def handle_service_error(request: Request, exc: AnswerServiceError) -> JSONResponse:
    """Convert service errors into a JSON status response."""
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
    content = {"message": exc.message}
    if exc.error is not None:
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app(
    settings: Optional[Settings] = None,
    connection_manager: Optional[ConnectionManager] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Runs the one-time setup for the process: the connection manager, the
    answers repository and the upload directory are built here and shared
    through app.state.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Answers API",
        description="Upload, list and delete answers with an attached file",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    storage = UploadStorage(settings.upload_dir)
    storage.ensure_directory()

    app.state.settings = settings
    app.state.connection_manager = connection_manager or ConnectionManager(settings)
    app.state.repository = AnswerRepository(settings.answers_collection)
    app.state.storage = storage

    # Must sit inside CORS so 500 bodies carry CORS headers
    app.add_middleware(CatchAllExceptionMiddleware)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AnswerServiceError, handle_service_error)

    app.include_router(health_router)
    app.include_router(router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()

    uvicorn.run(
        "backend.app.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        reload=settings.debug
    )
