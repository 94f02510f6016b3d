"""
FastAPI dependencies.

This module provides:
- Access to the console built by the lifespan (or injected by tests)
- A guard that refuses privileged requests after a session revocation
"""

import logging
from typing import Annotated

from fastapi import Depends, Request

from campus_console.infrastructure.config.container import Console

logger = logging.getLogger(__name__)


def get_console(request: Request) -> Console:
    """Return the console stored on the application state."""
    return request.app.state.console


def require_session(console: Annotated[Console, Depends(get_console)]) -> Console:
    """
    Dependency for privileged routes.

    Raises:
        SessionRevokedError: If the bypass session was revoked and the
            operator has not logged in again
    """
    console.sessions.ensure_active()
    return console


ConsoleDep = Annotated[Console, Depends(get_console)]
PrivilegedConsole = Annotated[Console, Depends(require_session)]
