"""Activity log domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

APPLICATION_APPROVED = "application_approved"
APPLICATION_REJECTED = "application_rejected"
SETTING_UPDATED = "setting_updated"
PRODUCT_UPDATED = "product_updated"
PRODUCT_DELETED = "product_deleted"


@dataclass(frozen=True)
class ActivityLogEntry:
    """
    Append-only record of an administrative action.

    Immutable entity that records who did what and when. The console
    only ever appends entries.
    """

    actor_id: str | None
    action_type: str
    details: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate entry after initialization."""
        if not self.action_type or not self.action_type.strip():
            raise ValueError("Activity log action type cannot be empty")

        if len(self.action_type) > 100:
            raise ValueError("Activity log action type cannot exceed 100 characters")

    def get_detail(self, key: str) -> Any:
        """Get a detail value, or None if it is not present."""
        return self.details.get(key)
