"""Dashboard and presence DTOs."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from campus_console.domain.entities.dashboard_snapshot import DashboardSnapshot
from campus_console.domain.entities.presence import PresenceCounts


class CountEntry(BaseModel):
    """A labelled count, e.g. a category or a day."""

    label: str
    count: int

    model_config = {"frozen": True}


def _entries(pairs: list[tuple[str, int]]) -> list[CountEntry]:
    return [CountEntry(label=label, count=count) for label, count in pairs]


class DashboardOutput(BaseModel):
    """Output DTO for the dashboard snapshot."""

    total_users: int
    buyers: int
    sellers: int
    publishers: int
    admins: int
    total_applications: int
    pending_applications: int
    approved_applications: int
    rejected_applications: int
    cancelled_applications: int
    total_products: int
    active_products: int
    inactive_products: int
    top_categories: list[CountEntry]
    user_growth: list[CountEntry]
    top_faculties: list[CountEntry]
    top_departments: list[CountEntry]
    subscriptions_enabled: bool
    settings: dict[str, Any]
    sms_balance: float
    recent_activity: int
    failed_slices: list[str] = Field(..., description="Slices that fell back to defaults")
    generated_at: Optional[datetime] = None
    is_loading: bool = Field(False, description="A non-silent refresh is in flight")

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, snapshot: DashboardSnapshot, is_loading: bool = False) -> "DashboardOutput":
        """Create DTO from a DashboardSnapshot."""
        return cls(
            total_users=snapshot.total_users,
            buyers=snapshot.buyers,
            sellers=snapshot.sellers,
            publishers=snapshot.publishers,
            admins=snapshot.admins,
            total_applications=snapshot.total_applications,
            pending_applications=snapshot.pending_applications,
            approved_applications=snapshot.approved_applications,
            rejected_applications=snapshot.rejected_applications,
            cancelled_applications=snapshot.cancelled_applications,
            total_products=snapshot.total_products,
            active_products=snapshot.active_products,
            inactive_products=snapshot.inactive_products,
            top_categories=_entries(snapshot.top_categories),
            user_growth=_entries(snapshot.user_growth),
            top_faculties=_entries(snapshot.top_faculties),
            top_departments=_entries(snapshot.top_departments),
            subscriptions_enabled=snapshot.subscriptions_enabled,
            settings=dict(snapshot.settings),
            sms_balance=snapshot.sms_balance,
            recent_activity=snapshot.recent_activity,
            failed_slices=list(snapshot.failed_slices),
            generated_at=snapshot.generated_at,
            is_loading=is_loading,
        )


class PresenceOutput(BaseModel):
    """Output DTO for live presence counts."""

    total: int
    buyers: int
    sellers: int
    admins: int

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, counts: PresenceCounts) -> "PresenceOutput":
        return cls(
            total=counts.total,
            buyers=counts.buyers,
            sellers=counts.sellers,
            admins=counts.admins,
        )
