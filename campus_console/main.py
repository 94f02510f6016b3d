"""
FastAPI application entry point.

This module sets up:
- FastAPI application with middleware
- Exception handlers
- API routes
- CORS configuration
"""

import logging
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from campus_console.api.routes import (
    applications,
    dashboard,
    health,
    platform,
    realtime,
    session,
)
from campus_console.application.exceptions import ApplicationError
from campus_console.core.config import settings
from campus_console.core.handlers import (
    application_exception_handler,
    domain_exception_handler,
    general_exception_handler,
    validation_exception_handler,
)
from campus_console.core.lifespan import lifespan
from campus_console.core.logging import setup_logging
from campus_console.core.middleware import RequestIDMiddleware, RequestLoggingMiddleware
from campus_console.domain.exceptions import DomainException
from campus_console.infrastructure.config.container import Console

logger = logging.getLogger(__name__)


def create_app(console: Optional[Console] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        console: Pre-built console; the lifespan builds one from settings
            when omitted

    Returns:
        Configured application
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description=settings.description,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )
    app.state.console = console

    # ========================================================================
    # Exception Handlers
    # ========================================================================
    app.add_exception_handler(ApplicationError, application_exception_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # ========================================================================
    # Middleware Setup (last added runs first)
    # ========================================================================
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # API Routes
    # ========================================================================
    v1_router = APIRouter(prefix="/v1")
    v1_router.include_router(applications.router)
    v1_router.include_router(dashboard.router)
    v1_router.include_router(platform.router)
    v1_router.include_router(session.router)
    v1_router.include_router(realtime.router)

    api_router = APIRouter(prefix="/api")
    api_router.include_router(v1_router)

    app.include_router(health.router)
    app.include_router(api_router)
    return app


setup_logging()
app = create_app()


def run() -> None:
    """Serve the console with uvicorn using the configured host and port."""
    uvicorn.run(
        "campus_console.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_config=None,
    )
