"""Dashboard snapshot domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class DashboardSnapshot:
    """
    Aggregate counts shown on the admin dashboard.

    Never persisted. Every refresh builds a new snapshot from scratch and
    replaces the previous one; there is no merging across refreshes.
    """

    total_users: int = 0
    buyers: int = 0
    sellers: int = 0
    publishers: int = 0
    admins: int = 0
    total_applications: int = 0
    pending_applications: int = 0
    approved_applications: int = 0
    rejected_applications: int = 0
    cancelled_applications: int = 0
    total_products: int = 0
    active_products: int = 0
    inactive_products: int = 0
    top_categories: list[tuple[str, int]] = field(default_factory=list)
    user_growth: list[tuple[str, int]] = field(default_factory=list)
    top_faculties: list[tuple[str, int]] = field(default_factory=list)
    top_departments: list[tuple[str, int]] = field(default_factory=list)
    subscriptions_enabled: bool = False
    settings: dict[str, Any] = field(default_factory=dict)
    sms_balance: float = 0.0
    recent_activity: int = 0
    failed_slices: tuple[str, ...] = ()
    generated_at: datetime | None = None

    @classmethod
    def empty(cls) -> "DashboardSnapshot":
        """Snapshot shown before the first refresh completes."""
        return cls()
