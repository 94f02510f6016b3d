"""Application services."""

from campus_console.application.services.application_board import ApplicationBoard
from campus_console.application.services.credential_resolver import (
    CredentialResolver,
    resolve_calling_convention,
)
from campus_console.application.services.heartbeat_monitor import (
    HeartbeatState,
    SessionHeartbeatMonitor,
)
from campus_console.application.services.operator_notices import (
    Notice,
    NoticeLevel,
    OperatorNotices,
)
from campus_console.application.services.presence_aggregator import PresenceAggregator
from campus_console.application.services.session_context import SessionContext
from campus_console.application.services.session_manager import SessionManager
from campus_console.application.services.stats_reconciler import StatsReconciler

__all__ = [
    "ApplicationBoard",
    "CredentialResolver",
    "HeartbeatState",
    "Notice",
    "NoticeLevel",
    "OperatorNotices",
    "PresenceAggregator",
    "SessionContext",
    "SessionHeartbeatMonitor",
    "SessionManager",
    "StatsReconciler",
    "resolve_calling_convention",
]
