"""Bypass session lifecycle: login, logout and start-up resume."""

import logging
from typing import Callable, Optional

from campus_console.application.exceptions import SessionRevokedError
from campus_console.application.ports.outbound.session_check_port import SessionCheckPort
from campus_console.application.services.heartbeat_monitor import (
    HeartbeatState,
    SessionHeartbeatMonitor,
)
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.session_context import SessionContext
from campus_console.domain.value_objects.bypass_session import BypassSession

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the session context and the heartbeat monitor watching it.

    Each login gets a fresh monitor, because a revoked monitor never
    resumes.
    """

    def __init__(
        self,
        context: SessionContext,
        checker: SessionCheckPort,
        notices: OperatorNotices,
        monitor_factory: Callable[[], SessionHeartbeatMonitor],
    ):
        self.context = context
        self._checker = checker
        self._notices = notices
        self._monitor_factory = monitor_factory
        self.monitor: Optional[SessionHeartbeatMonitor] = None

    @property
    def heartbeat_state(self) -> HeartbeatState:
        return self.monitor.state if self.monitor else HeartbeatState.IDLE

    async def resume(self) -> HeartbeatState:
        """Start monitoring a session left in the local store by a previous run."""
        self.monitor = self._monitor_factory()
        return await self.monitor.start()

    async def login(self, secret: str, token: str) -> HeartbeatState:
        """
        Install a new bypass session and start monitoring it.

        Args:
            secret: Shared bypass secret
            token: Session token issued by the backend

        Returns:
            Heartbeat state after the first check

        Raises:
            IncompleteBypassSessionError: If secret or token is empty
            SessionRevokedError: If the first check already rejects the session
        """
        session = BypassSession.start(secret, token)
        await self.shutdown()
        self.context.begin(session)

        state = await self.resume()
        if state is HeartbeatState.REVOKED:
            raise SessionRevokedError(self.context.revocation_reason or "Session rejected")
        self._notices.success("System admin session started")
        return state

    async def logout(self) -> None:
        """
        End the bypass session.

        The backend is asked to release the session first so another login
        can take over; a failed release is logged and teardown continues.
        """
        session = self.context.current
        await self.shutdown()

        if session is not None and session.is_monitorable:
            try:
                await self._checker.release_session(session.secret, session.token)
            except Exception:
                logger.error("Failed to release bypass session", exc_info=True)

        self.context.end()
        self._notices.info("Signed out")

    def ensure_active(self) -> None:
        """
        Refuse privileged work after a revocation.

        Raises:
            SessionRevokedError: If the operator must log in again
        """
        if self.context.requires_login:
            raise SessionRevokedError(self.context.revocation_reason or "Session revoked")

    async def shutdown(self) -> None:
        """Stop the current monitor, if any."""
        if self.monitor is not None:
            await self.monitor.stop()
