import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from campus_console.core.config import settings
from campus_console.infrastructure.config.container import Console

logger = logging.getLogger(__name__)


# ============================================================================
# Lifespan Context Manager
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore
    """
    Lifespan context manager for startup and shutdown events.

    Handles:
    - Building the console (HTTP clients, gateways, services) unless one
      was injected
    - Resuming a stored bypass session, first stats load, presence feed
    - Stopping background tasks and closing HTTP clients on shutdown
    """
    logger.info(f"Starting {settings.app_name} v{settings.version}")
    logger.info(f"Environment: {settings.environment}")

    if getattr(app.state, "console", None) is None:
        app.state.console = Console(settings)
    console: Console = app.state.console

    await console.start()
    logger.info("Console started")

    yield

    logger.info("Shutting down application")
    await console.stop()
