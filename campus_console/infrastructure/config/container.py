"""
Composition root.

Console builds every long-lived object from Settings and owns their
lifecycle. Any port can be replaced through a keyword argument, which is
how tests run the whole console against in-memory fakes.
"""

import logging
from typing import Callable, Optional

from campus_console.application.ports.outbound.backend_gateway_port import BackendGatewayPort
from campus_console.application.ports.outbound.session_check_port import SessionCheckPort
from campus_console.application.ports.outbound.session_store_port import SessionStorePort
from campus_console.application.ports.outbound.sms_sender_port import SmsSenderPort
from campus_console.application.ports.outbound.stats_reader_port import StatsReaderPort
from campus_console.application.services.application_board import ApplicationBoard
from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.application.services.heartbeat_monitor import SessionHeartbeatMonitor
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.presence_aggregator import PresenceAggregator
from campus_console.application.services.session_context import SessionContext
from campus_console.application.services.session_manager import SessionManager
from campus_console.application.services.stats_reconciler import StatsReconciler
from campus_console.application.use_cases.applications import (
    ApproveApplicationUseCase,
    ListApplicationsUseCase,
    RejectApplicationUseCase,
)
from campus_console.application.use_cases.platform import (
    DeleteProductUseCase,
    ListSellersUseCase,
    SetProductActiveUseCase,
    UpdatePlatformSettingUseCase,
)
from campus_console.core.config import Settings
from campus_console.infrastructure.adapters.outbound.backend import (
    BackendRestClient,
    BackendSessionChecker,
    BackendStatsReader,
    DirectTableGateway,
    RemoteProcedureGateway,
)
from campus_console.infrastructure.adapters.outbound.notifications import ArkeselSmsSender
from campus_console.infrastructure.adapters.outbound.realtime import InProcessRealtimeFeed
from campus_console.infrastructure.adapters.outbound.session import FileSessionStore

logger = logging.getLogger(__name__)


class Console:
    """Everything the admin console needs at runtime."""

    def __init__(
        self,
        settings: Settings,
        *,
        backend: Optional[BackendRestClient] = None,
        direct_gateway: Optional[BackendGatewayPort] = None,
        procedure_gateway_factory: Optional[Callable[[str], BackendGatewayPort]] = None,
        session_checker: Optional[SessionCheckPort] = None,
        session_store: Optional[SessionStorePort] = None,
        stats_reader: Optional[StatsReaderPort] = None,
        sms_sender: Optional[SmsSenderPort] = None,
        feed: Optional[InProcessRealtimeFeed] = None,
    ):
        self.settings = settings
        self.notices = OperatorNotices(max_items=settings.notice_buffer_size)

        self.backend = backend or BackendRestClient(
            BackendRestClient.build_http_client(
                settings.backend_url,
                settings.backend_anon_key,
                settings.backend_access_token,
                settings.backend_timeout_seconds,
            )
        )

        self.context = SessionContext(session_store or FileSessionStore(settings.session_state_path))
        self.resolver = CredentialResolver(
            self.context,
            direct_gateway or DirectTableGateway(self.backend),
            procedure_gateway_factory or (lambda secret: RemoteProcedureGateway(self.backend, secret)),
        )

        self.board = ApplicationBoard()
        self.session_checker = session_checker or BackendSessionChecker(self.backend)
        self.sessions = SessionManager(
            self.context, self.session_checker, self.notices, monitor_factory=self._new_monitor
        )

        self.sms_sender = sms_sender
        if self.sms_sender is None and settings.sms_configured:
            self.sms_sender = ArkeselSmsSender(
                ArkeselSmsSender.build_http_client(
                    settings.sms_base_url, settings.sms_api_key, settings.backend_timeout_seconds
                ),
                sender=settings.sms_sender,
            )

        self.feed = feed or InProcessRealtimeFeed()
        self.stats = StatsReconciler(
            stats_reader or BackendStatsReader(self.backend), self.resolver, self.sms_sender
        )
        self.presence = PresenceAggregator(settings.operator_id, self.notices)

        self.list_applications = ListApplicationsUseCase(self.board, self.resolver)
        self.approve_application = ApproveApplicationUseCase(
            self.board,
            self.resolver,
            self.notices,
            self.stats,
            sms_sender=self.sms_sender,
            operator_id=settings.operator_id,
            platform_name=settings.platform_name,
        )
        self.reject_application = RejectApplicationUseCase(
            self.board, self.resolver, self.notices, self.stats, operator_id=settings.operator_id
        )
        self.update_platform_setting = UpdatePlatformSettingUseCase(
            self.resolver, self.notices, self.stats, operator_id=settings.operator_id
        )
        self.set_product_active = SetProductActiveUseCase(
            self.resolver, self.notices, self.stats, operator_id=settings.operator_id
        )
        self.delete_product = DeleteProductUseCase(
            self.resolver, self.notices, self.stats, operator_id=settings.operator_id
        )
        self.list_sellers = ListSellersUseCase(self.resolver)

    async def start(self) -> None:
        """Resume a stored session, load the dashboard and follow the feed."""
        await self.sessions.resume()
        await self.stats.start(self.feed, self.settings.stats_poll_interval_seconds)
        self.presence.start(self.feed)

    async def stop(self) -> None:
        """Stop background work and close HTTP clients."""
        await self.sessions.shutdown()
        await self.stats.stop()
        await self.presence.stop()
        await self.backend.aclose()
        if isinstance(self.sms_sender, ArkeselSmsSender):
            await self.sms_sender.aclose()

    def _new_monitor(self) -> SessionHeartbeatMonitor:
        return SessionHeartbeatMonitor(
            self.context,
            self.session_checker,
            self.notices,
            interval_seconds=self.settings.heartbeat_interval_seconds,
            on_revoked=self._leave_privileged_view,
        )

    def _leave_privileged_view(self, reason: str) -> None:
        # Drop everything loaded with the revoked session's privileges.
        self.board.replace_all([])
        logger.warning(f"Privileged view cleared after revocation: {reason}")
