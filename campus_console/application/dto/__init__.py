"""Data Transfer Objects for the application layer."""

from campus_console.application.dto.application_dto import (
    ApplicationListOutput,
    ApplicationOutput,
    RejectApplicationInput,
)
from campus_console.application.dto.dashboard_dto import (
    CountEntry,
    DashboardOutput,
    PresenceOutput,
)
from campus_console.application.dto.platform_dto import (
    ProductOutput,
    ProductUpdateInput,
    SellerOutput,
    SettingOutput,
    SettingUpdateInput,
)
from campus_console.application.dto.realtime_dto import (
    ChangeEventInput,
    JoinEventInput,
    PresenceEventInput,
    SyncEventInput,
)
from campus_console.application.dto.session_dto import (
    BypassLoginInput,
    NoticeOutput,
    SessionStatusOutput,
)

__all__ = [
    "ApplicationListOutput",
    "ApplicationOutput",
    "BypassLoginInput",
    "ChangeEventInput",
    "CountEntry",
    "DashboardOutput",
    "JoinEventInput",
    "NoticeOutput",
    "PresenceEventInput",
    "PresenceOutput",
    "ProductOutput",
    "ProductUpdateInput",
    "RejectApplicationInput",
    "SellerOutput",
    "SessionStatusOutput",
    "SettingOutput",
    "SettingUpdateInput",
    "SyncEventInput",
]
