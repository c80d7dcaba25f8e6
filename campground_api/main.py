# campground_api/main.py
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from campground_api import __version__
from campground_api.adapters.api.errors import install_exception_handlers
from campground_api.adapters.api.routers import campgrounds, home, reviews, users
from campground_api.adapters.persistence.database import init_db
from campground_api.shared.config import ImageStorageBackend, Settings
from campground_api.shared.container import Container, release_resources
from campground_api.shared.logging_config import configure_logging
from campground_api.shared.telemetry import instrument_fastapi, setup_telemetry, shutdown_telemetry

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """
    Factory function to create the FastAPI application.

    `settings` overrides the container's settings provider; `container`
    lets tests pass one whose adapters are already overridden.
    """
    container = container or Container()
    if settings is not None:
        container.settings.override(settings)
    settings = container.settings()

    # Fail fast on a production deployment without a session secret.
    _ = settings.session_secret

    configure_logging(settings)
    tracer_provider = setup_telemetry(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        1. Startup: create missing tables.
        2. Shutdown: close outbound clients, release pooled connections,
           flush pending spans.
        """
        logger.info("app_startup", env=settings.APP_ENV.value, database=settings.DATABASE_URL.split(":", 1)[0])
        init_db(container.engine())
        yield
        logger.info("app_shutdown")
        release_resources(container)
        shutdown_telemetry(tracer_provider)

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="Campground listings and reviews (Hexagonal Architecture)",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
    )
    app.state.container = container
    app.state.started_at = time.monotonic()

    # Global Middleware
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    install_exception_handlers(app, settings)

    # Register Routers
    app.include_router(home.router)
    app.include_router(users.router)
    app.include_router(campgrounds.router)
    app.include_router(reviews.router)

    if settings.IMAGE_STORAGE_BACKEND == ImageStorageBackend.FILESYSTEM:
        upload_dir = Path(settings.UPLOAD_DIR)
        upload_dir.mkdir(parents=True, exist_ok=True)
        app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=upload_dir), name="uploads")

    instrument_fastapi(app, settings)
    return app


# Entry point for local debugging (e.g. `python -m campground_api.main`)
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "campground_api.main:create_app",
        host="0.0.0.0",
        port=Settings().PORT,
        reload=True,
        factory=True,
    )
