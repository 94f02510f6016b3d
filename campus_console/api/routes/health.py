"""
Health Check Endpoints
"""

import logging
from typing import Any

from fastapi import APIRouter

from campus_console.api.dependencies import ConsoleDep
from campus_console.core.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check() -> dict[str, str]:
    """
    Basic health check endpoint.

    Returns:
        Basic application information and status
    """
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": settings.version,
        "environment": settings.environment,
    }


@router.get("/ready")
async def readiness_check(console: ConsoleDep) -> dict[str, Any]:
    """
    Readiness check endpoint.

    Ready when the bypass session (if any) is not revoked and the last
    dashboard refresh reached every backend slice.
    """
    session_ok = not console.context.requires_login
    snapshot = console.stats.snapshot
    backend_ok = snapshot.generated_at is not None and not snapshot.failed_slices

    return {
        "status": "ready" if session_ok and backend_ok else "degraded",
        "app": settings.app_name,
        "version": settings.version,
        "checks": {
            "session": "ok" if session_ok else "revoked",
            "backend": "ok" if backend_ok else "ko",
            "heartbeat": console.sessions.heartbeat_state.value,
        },
    }
