"""
Heartbeat for bypass sessions.

While a bypass session is held, the backend is asked at a fixed interval
whether the session is still the authoritative one. The first check runs
as soon as monitoring starts. Any failure ends the session for good: the
stored credentials are wiped, the operator is told why, and the console
requires a new login.
"""

import asyncio
import logging
from contextlib import suppress
from enum import Enum
from typing import Callable, Optional

from campus_console.application.ports.outbound.session_check_port import SessionCheckPort
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.session_context import SessionContext
from campus_console.domain.value_objects.bypass_session import BypassSession

logger = logging.getLogger(__name__)


class HeartbeatState(str, Enum):
    IDLE = "idle"
    MONITORING = "monitoring"
    REVOKED = "revoked"


class SessionHeartbeatMonitor:
    """
    Revalidates one bypass session until it is revoked or stopped.

    States: IDLE (nothing to monitor), MONITORING, REVOKED. REVOKED is
    terminal; a new login gets a new monitor.
    """

    def __init__(
        self,
        context: SessionContext,
        checker: SessionCheckPort,
        notices: OperatorNotices,
        interval_seconds: float = 60.0,
        on_revoked: Optional[Callable[[str], None]] = None,
    ):
        """
        Initialize monitor.

        Args:
            context: Session context holding the bypass session
            checker: Backend session check
            notices: Operator notices
            interval_seconds: Time between two checks
            on_revoked: Called with the reason once the session is revoked
        """
        self.context = context
        self.state = HeartbeatState.IDLE
        self.interval_seconds = interval_seconds
        self._checker = checker
        self._notices = notices
        self._on_revoked = on_revoked
        self._session: Optional[BypassSession] = None
        self._task: Optional[asyncio.Task] = None

    async def start(self) -> HeartbeatState:
        """
        Start monitoring the session in the context, if there is one.

        Performs the first check immediately, then schedules the periodic
        checks in a background task.

        Returns:
            State after the first check
        """
        if self.state is not HeartbeatState.IDLE:
            return self.state

        session = self.context.current
        if session is None or not session.is_monitorable:
            logger.debug("No bypass session to monitor")
            return self.state

        self._session = session
        self.state = HeartbeatState.MONITORING
        logger.info("Bypass session heartbeat started")

        await self.check_once()
        if self.state is HeartbeatState.MONITORING:
            self._task = asyncio.create_task(self._run(), name="bypass-session-heartbeat")
        return self.state

    async def check_once(self) -> bool:
        """
        Validate the session once.

        Returns:
            True if the session is still valid
        """
        if self.state is not HeartbeatState.MONITORING or self._session is None:
            return False

        session = self._session
        try:
            result = await self._checker.validate_session(session.secret, session.token)
        except Exception as exc:
            logger.error("Bypass session check failed", exc_info=True)
            reason = f"Session check failed: {getattr(exc, 'message', None) or exc}"
            self._revoke_if_current(session, reason)
            return False

        if result.ok is True:
            logger.debug("Bypass session still valid")
            return True

        self._revoke_if_current(session, result.reason or "Session is no longer valid")
        return False

    async def stop(self) -> None:
        """Stop periodic checks without touching the session."""
        task, self._task = self._task, None
        if self.state is HeartbeatState.MONITORING:
            self.state = HeartbeatState.IDLE
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while self.state is HeartbeatState.MONITORING:
            await asyncio.sleep(self.interval_seconds)
            await self.check_once()

    def _revoke_if_current(self, session: BypassSession, reason: str) -> None:
        # A check that resolves after logout or a new login must not end
        # the session that replaced it.
        if self.state is not HeartbeatState.MONITORING or self.context.current is not session:
            logger.info("Ignoring session check result for a replaced session")
            self.state = HeartbeatState.IDLE
            return

        self.state = HeartbeatState.REVOKED
        self.context.end(reason)
        self._notices.error(f"System admin session ended: {reason}. Please log in again.")
        if self._on_revoked is not None:
            self._on_revoked(reason)
