"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.adapters.repository.postgres import PostgresUserRepository, run_migrations
from src.api.dependencies import (
    build_email_sender,
    build_password_hasher,
    build_user_repository,
    get_user_repository,
)
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.exceptions import RepositoryError
from src.domain.ports import UserRepository

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "User Registration API v1 - Register, list and delete users",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the user repository and runs migrations (postgres backend)
    - Builds the email sender and password hasher
    - Closes repository and email sender on shutdown
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    logger.info("Starting application...")
    logger.info(
        "Backends: repository=%s email=%s hasher=%s",
        settings.user_repository_backend,
        settings.email_backend,
        settings.password_hasher,
    )

    user_repository = build_user_repository(settings)
    if isinstance(user_repository, PostgresUserRepository):
        logger.info("Running database migrations...")
        run_migrations(user_repository.pool)

    email_sender = build_email_sender(settings)

    # Store adapters in app state for dependency injection
    app.state.user_repository = user_repository
    app.state.email_sender = email_sender
    app.state.password_hasher = build_password_hasher(settings)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    email_sender.close()
    user_repository.close()
    logger.info("Adapters closed")


app = FastAPI(
    title="user-registration",
    description="User Registration API - Hexagonal architecture demo",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    logger.error("Repository failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "User store unavailable"},
    )


@app.get("/health")
def health_check(repository: UserRepository = Depends(get_user_repository)) -> dict[str, str]:
    """
    Health check endpoint with repository validation.

    Returns 200 OK if the application and its user store are healthy;
    a store failure is answered 503 by the RepositoryError handler.
    """
    repository.ping()
    return {"status": "healthy"}
