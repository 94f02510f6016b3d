"""Outbound ports (interfaces) for the application layer."""

from campus_console.application.ports.outbound.backend_gateway_port import (
    BackendGatewayPort,
    CallingConvention,
)
from campus_console.application.ports.outbound.query import (
    Collection,
    Filter,
    FilterOp,
    Order,
)
from campus_console.application.ports.outbound.realtime_feed_port import (
    ChangeEvent,
    RealtimeFeedPort,
    Subscription,
)
from campus_console.application.ports.outbound.session_check_port import (
    SessionCheckPort,
    SessionCheckResult,
)
from campus_console.application.ports.outbound.session_store_port import SessionStorePort
from campus_console.application.ports.outbound.sms_sender_port import SmsSenderPort
from campus_console.application.ports.outbound.stats_reader_port import StatsReaderPort

__all__ = [
    "BackendGatewayPort",
    "CallingConvention",
    "ChangeEvent",
    "Collection",
    "Filter",
    "FilterOp",
    "Order",
    "RealtimeFeedPort",
    "SessionCheckPort",
    "SessionCheckResult",
    "SessionStorePort",
    "SmsSenderPort",
    "StatsReaderPort",
    "Subscription",
]
