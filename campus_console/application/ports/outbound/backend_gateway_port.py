"""Backend gateway port interface."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Protocol

from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.value_objects.role import Role


class CallingConvention(str, Enum):
    """How a gateway authenticates its calls to the backend."""

    # Table operations under the caller's own identity and row-level policy
    DIRECT_TABLE = "direct_table"
    # Named procedures that receive the shared secret explicitly
    REMOTE_PROCEDURE = "remote_procedure"


class BackendGatewayPort(Protocol):
    """
    Gateway interface for every administrative backend operation.

    Exactly two implementations exist, one per calling convention. Both
    must give each operation the same preconditions and the same
    resulting state, so business logic never depends on which one is in
    use. A single call is atomic; a sequence of calls is not.
    """

    convention: CallingConvention

    async def get_identity(self, identity_id: str) -> Optional[Identity]:
        """
        Retrieve an identity by ID.

        Args:
            identity_id: Identity's unique identifier

        Returns:
            Identity if found, None otherwise
        """
        ...

    async def list_applications(
        self,
        status: Optional[ApplicationStatus] = None,
        limit: int = 100,
    ) -> list[SellerApplication]:
        """
        List seller applications, most recently updated first.

        Args:
            status: Only return applications in this status
            limit: Maximum number of applications to return

        Returns:
            List of applications
        """
        ...

    async def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        reviewed_at: datetime,
        reviewed_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        """
        Persist a review decision on an application.

        Args:
            application_id: Application's unique identifier
            status: New status
            reviewed_at: Review timestamp
            reviewed_by: Reviewer id; omitted from the write when None
            rejection_reason: Reason when rejecting

        Raises:
            AuthorizationError: If the backend refuses the write
        """
        ...

    async def update_identity_role(self, identity_id: str, role: Role) -> None:
        """
        Persist a new role on an identity.

        Raises:
            AuthorizationError: If the backend refuses the write
        """
        ...

    async def upsert_seller_profile(self, profile: SellerProfile) -> None:
        """
        Create or update the seller profile keyed by its user id.

        Raises:
            AuthorizationError: If the backend refuses the write
        """
        ...

    async def append_activity_log(self, entry: ActivityLogEntry) -> None:
        """Append an entry to the activity log."""
        ...

    async def set_platform_setting(self, key: str, value: Any) -> None:
        """Create or update a platform setting."""
        ...

    async def list_platform_settings(self) -> dict[str, Any]:
        """Return all platform settings as a key/value mapping."""
        ...

    async def set_product_active(self, product_id: str, is_active: bool) -> None:
        """Show or hide a product."""
        ...

    async def delete_product(self, product_id: str) -> None:
        """Delete a product permanently."""
        ...

    async def list_sellers(self) -> list[Identity]:
        """List identities holding selling capability."""
        ...
