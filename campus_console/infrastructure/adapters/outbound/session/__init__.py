"""Bypass session store adapters."""

from campus_console.infrastructure.adapters.outbound.session.file_session_store import (
    FileSessionStore,
    InMemorySessionStore,
)

__all__ = ["FileSessionStore", "InMemorySessionStore"]
