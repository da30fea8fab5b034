"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seminar_registry import __version__
from seminar_registry.api.models import APIResponse
from seminar_registry.api.routes import (
    attendance,
    certificates,
    health,
    registrations,
    seminars,
    users,
)
from seminar_registry.config import Settings
from seminar_registry.entity_store import EmailExistsError, EntityStore, EntityStoreError
from seminar_registry.logging import sanitize_for_log
from seminar_registry.workflow import (
    ConflictError,
    NotFoundError,
    SeminarRegistry,
    ValidationFailure,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the entity store on startup unless a registry was injected, and
    closes only the store it opened.
    """
    settings: Settings = app.state.settings
    owned_store: EntityStore | None = None

    # Startup
    if app.state.registry is None:
        owned_store = EntityStore(settings.database.path)
        app.state.registry = SeminarRegistry.from_store(
            owned_store, certificate_base_path=settings.certificates.base_path
        )
        logger.info("Entity store opened at %s", settings.database.path)

    yield

    # Shutdown
    if owned_store is not None:
        app.state.registry = None
        owned_store.close()
        logger.info("Entity store closed")


def create_app(
    settings: Settings | None = None, registry: SeminarRegistry | None = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Configuration. Defaults to built-in settings.
        registry: Pre-built registry to serve. When None, one is created on
            startup from settings.database.path.
    """
    settings = settings if settings is not None else Settings()

    app = FastAPI(
        title="Seminar Registry API",
        description="REST API for seminar registration, attendance and certificates",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.registry = registry

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(_request: Request, exc: ConflictError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(ValidationFailure)
    async def validation_failure_handler(
        _request: Request, exc: ValidationFailure
    ) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))

    @app.exception_handler(EmailExistsError)
    async def email_exists_handler(_request: Request, _exc: EmailExistsError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, "User with this email already exists")

    @app.exception_handler(EntityStoreError)
    async def entity_store_error_handler(
        request: Request, exc: EntityStoreError
    ) -> JSONResponse:
        logger.error(
            "Entity store error on %s %s: %s",
            request.method,
            request.url.path,
            sanitize_for_log(str(exc)),
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    # Include routers
    app.include_router(health.router, prefix="/api/v1")
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(seminars.router, prefix="/api/v1")
    app.include_router(registrations.router, prefix="/api/v1")
    app.include_router(attendance.router, prefix="/api/v1")
    app.include_router(certificates.router, prefix="/api/v1")

    return app
