"""Domain entities package."""

from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.dashboard_snapshot import DashboardSnapshot
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.presence import (
    JoinEvent,
    MembershipEvent,
    PresenceCounts,
    PresenceMember,
    SyncEvent,
)
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile

__all__ = [
    "ActivityLogEntry",
    "ApplicationStatus",
    "DashboardSnapshot",
    "Identity",
    "JoinEvent",
    "MembershipEvent",
    "PresenceCounts",
    "PresenceMember",
    "SellerApplication",
    "SellerProfile",
    "SyncEvent",
]
