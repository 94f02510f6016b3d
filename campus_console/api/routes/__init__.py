"""API route modules."""

from campus_console.api.routes import (
    applications,
    dashboard,
    health,
    platform,
    realtime,
    session,
)

__all__ = ["applications", "dashboard", "health", "platform", "realtime", "session"]
