"""Bypass session context."""

import logging
from typing import Optional

from campus_console.application.ports.outbound.session_store_port import SessionStorePort
from campus_console.domain.value_objects.bypass_session import BypassSession

logger = logging.getLogger(__name__)


class SessionContext:
    """
    Holds the current bypass session for the console process.

    The session is loaded once from the local store when the context is
    created, replaced at login and destroyed at logout or revocation.
    Every change is written through to the store.
    """

    def __init__(self, store: SessionStorePort):
        """
        Initialize the context from the local store.

        Args:
            store: Local persistence for flag, secret and token
        """
        self._store = store
        self._session: Optional[BypassSession] = store.load()
        self.revocation_reason: Optional[str] = None

    @property
    def current(self) -> Optional[BypassSession]:
        """Session in force, or None when the standard identity is used."""
        return self._session

    @property
    def requires_login(self) -> bool:
        """True after a revocation until the operator logs in again."""
        return self.revocation_reason is not None

    def begin(self, session: BypassSession) -> None:
        """
        Install a new session at login.

        Args:
            session: Freshly issued bypass session
        """
        self._store.save(session)
        self._session = session
        self.revocation_reason = None
        logger.info("Bypass session started")

    def end(self, reason: Optional[str] = None) -> None:
        """
        Destroy the session.

        The in-memory session is gone even when clearing the store fails.

        Args:
            reason: Revocation reason; None for a regular logout
        """
        self._session = None
        self.revocation_reason = reason
        if reason:
            logger.warning(f"Bypass session revoked: {reason}")
        else:
            logger.info("Bypass session ended")
        self._store.clear()
