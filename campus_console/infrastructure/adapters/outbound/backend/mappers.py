"""
Mapping between backend rows and domain entities.

Rows arrive as JSON objects with ISO 8601 timestamps. Remote procedures
may return a single object, a one-element list or null for a lookup;
``first_row`` normalises that.
"""

from datetime import datetime
from typing import Any, Optional

from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.value_objects.role import Role


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def first_row(data: Any) -> Optional[dict[str, Any]]:
    """Return the single row of a lookup result, or None."""
    if isinstance(data, list):
        return data[0] if data else None
    if isinstance(data, dict):
        return data
    return None


class IdentityMapper:
    """Mapper between Identity entity and ``profiles`` rows."""

    @staticmethod
    def to_entity(row: dict[str, Any]) -> Identity:
        return Identity(
            id=str(row["id"]),
            role=Role.parse(row.get("role") or Role.BUYER.value),
            full_name=row.get("full_name") or "",
            email=row.get("email"),
            phone=row.get("phone"),
            faculty=row.get("faculty"),
            department=row.get("department"),
            is_active=row.get("is_active", True) is not False,
            created_at=parse_datetime(row.get("created_at")),
        )


class SellerApplicationMapper:
    """Mapper between SellerApplication entity and ``seller_applications`` rows."""

    @staticmethod
    def to_entity(row: dict[str, Any]) -> SellerApplication:
        """
        Convert a row to an entity.

        The applicant's name comes from an embedded ``profiles`` object on
        the table path and from a flat ``applicant_name`` column on the
        procedure path.
        """
        applicant = row.get("profiles") or {}
        if isinstance(applicant, list):
            applicant = applicant[0] if applicant else {}

        return SellerApplication(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            business_name=row.get("business_name") or "",
            business_category=row.get("business_category") or "",
            business_description=row.get("business_description") or "",
            contact_phone=row.get("contact_phone"),
            contact_email=row.get("contact_email"),
            business_logo=row.get("business_logo"),
            status=ApplicationStatus.parse(row.get("status") or ApplicationStatus.PENDING.value),
            applicant_name=row.get("applicant_name") or applicant.get("full_name"),
            created_at=parse_datetime(row.get("created_at")),
            updated_at=parse_datetime(row.get("updated_at")),
            reviewed_at=parse_datetime(row.get("reviewed_at")),
            reviewed_by=row.get("reviewed_by"),
            rejection_reason=row.get("rejection_reason"),
        )

    @staticmethod
    def to_status_update(
        status: ApplicationStatus,
        reviewed_at: datetime,
        reviewed_by: Optional[str],
        rejection_reason: Optional[str],
    ) -> dict[str, Any]:
        """Columns written by a review. ``reviewed_by`` is left out when unknown."""
        values: dict[str, Any] = {
            "status": status.value,
            "reviewed_at": format_datetime(reviewed_at),
            "updated_at": format_datetime(reviewed_at),
        }
        if reviewed_by is not None:
            values["reviewed_by"] = reviewed_by
        if status is ApplicationStatus.REJECTED and rejection_reason:
            values["rejection_reason"] = rejection_reason
        return values


class SellerProfileMapper:
    """Mapper between SellerProfile entity and ``seller_profiles`` rows."""

    @staticmethod
    def to_row(profile: SellerProfile) -> dict[str, Any]:
        return {
            "user_id": profile.user_id,
            "business_name": profile.business_name,
            "business_category": profile.business_category,
            "business_description": profile.business_description,
            "contact_phone": profile.contact_phone,
            "contact_email": profile.contact_email,
            "business_logo": profile.business_logo,
            "is_active": profile.is_active,
            "updated_at": format_datetime(profile.updated_at),
        }


class ActivityLogMapper:
    """Mapper between ActivityLogEntry and ``activity_logs`` rows."""

    @staticmethod
    def to_row(entry: ActivityLogEntry) -> dict[str, Any]:
        row: dict[str, Any] = {
            "user_id": entry.actor_id,
            "action_type": entry.action_type,
            "action_details": dict(entry.details),
        }
        if entry.created_at is not None:
            row["created_at"] = format_datetime(entry.created_at)
        return row
