"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, static serving, and lifespan events.

Run locally with ``python -m src.api.main``.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.api.dependencies import build_notifier, build_repository, build_verifier
from src.api.models import HealthResponse
from src.api.routes import FIELDS_REQUIRED_MESSAGE, router
from src.config.diagnostics import log_configuration_report
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "signup",
        "description": "Landing page signup - store registrants and send notifications",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Logs the configuration report
    - Creates database connection pool and runs migrations when DATABASE_URL is set
    - Builds the registrant store, verifier and notifier
    - Closes connection pool on shutdown
    """
    settings: Settings = app.state.settings

    logger.info("Starting application...")
    log_configuration_report(settings)

    pool = None
    if settings.database_url:
        logger.info("Connecting to database...")
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
            open=True,
        )
        logger.info("Running database migrations...")
        run_migrations(pool)

    app.state.repository = build_repository(pool)
    app.state.verifier = build_verifier(settings)
    app.state.notifier = build_notifier(settings)
    logger.info(
        "Application startup complete (store=%s, notifier=%s, recaptcha=%s)",
        type(app.state.repository).__name__,
        type(app.state.notifier).__name__,
        "on" if app.state.verifier.enabled else "bypass",
    )

    yield

    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed signup bodies as 400 with the usual message shape."""
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": FIELDS_REQUIRED_MESSAGE},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application for the given settings (environment by default)."""
    settings = settings or get_settings()

    app = FastAPI(
        title="athaan-signup",
        description="Landing page signup intake - validate, verify, store and notify",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(router, prefix="/api")

    @app.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Liveness check. Does not touch the database or the mail relay."""
        return HealthResponse(status="ok")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def landing_page(full_path: str) -> FileResponse:
        """
        Serve static assets, falling back to the landing page.

        Any path that does not name a file inside the static directory
        gets index.html.
        """
        static_dir = settings.static_dir.resolve()
        if full_path:
            try:
                candidate = (static_dir / full_path).resolve()
                if candidate.is_relative_to(static_dir) and candidate.is_file():
                    return FileResponse(candidate)
            except (OSError, ValueError):
                logger.info("Unservable static path %r, serving landing page", full_path)

        index = static_dir / "index.html"
        if not index.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
        return FileResponse(index)

    return app


app = create_app()


def run() -> None:
    """Configure logging and serve the application with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
