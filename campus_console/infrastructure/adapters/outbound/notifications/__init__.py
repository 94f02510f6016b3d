"""Notification adapters."""

from campus_console.infrastructure.adapters.outbound.notifications.arkesel_sms_sender import (
    ArkeselSmsSender,
)

__all__ = ["ArkeselSmsSender"]
