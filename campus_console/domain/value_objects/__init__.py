"""Domain value objects package."""

from campus_console.domain.value_objects.bypass_session import BypassSession
from campus_console.domain.value_objects.identity_ref import (
    SYSTEM_OPERATOR_ID,
    is_valid_identity_reference,
    reviewer_reference,
)
from campus_console.domain.value_objects.role import (
    ADMIN_CLASS_ROLES,
    PUBLISHING_ROLES,
    SELLER_CLASS_ROLES,
    Role,
)

__all__ = [
    "ADMIN_CLASS_ROLES",
    "BypassSession",
    "PUBLISHING_ROLES",
    "Role",
    "SELLER_CLASS_ROLES",
    "SYSTEM_OPERATOR_ID",
    "is_valid_identity_reference",
    "reviewer_reference",
]
