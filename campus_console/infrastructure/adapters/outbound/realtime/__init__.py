"""Realtime feed adapters."""

from campus_console.infrastructure.adapters.outbound.realtime.in_process_feed import (
    InProcessRealtimeFeed,
    QueueSubscription,
)

__all__ = ["InProcessRealtimeFeed", "QueueSubscription"]
