"""Product moderation use cases."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.stats_reconciler import StatsReconciler
from campus_console.domain.entities.activity_log import (
    PRODUCT_DELETED,
    PRODUCT_UPDATED,
    ActivityLogEntry,
)
from campus_console.domain.value_objects.identity_ref import reviewer_reference

logger = logging.getLogger(__name__)


class _ProductModeration:
    def __init__(
        self,
        resolver: CredentialResolver,
        notices: OperatorNotices,
        stats: StatsReconciler,
        operator_id: Optional[str] = None,
    ):
        self.resolver = resolver
        self.notices = notices
        self.stats = stats
        self.operator_id = operator_id

    async def _log(self, action_type: str, details: dict[str, Any]) -> None:
        entry = ActivityLogEntry(
            actor_id=reviewer_reference(self.operator_id),
            action_type=action_type,
            details=details,
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.resolver.gateway_for("append_activity_log").append_activity_log(entry)
        except Exception:
            logger.error(f"Failed to log {action_type}", exc_info=True)


class SetProductActiveUseCase(_ProductModeration):
    """Use case for hiding or re-listing a product."""

    async def execute(self, product_id: str, is_active: bool) -> dict[str, Any]:
        """
        Toggle a product's visibility.

        Raises:
            AuthorizationError: If the backend refuses the change
        """
        gateway = self.resolver.gateway_for("set_product_active")
        try:
            await gateway.set_product_active(product_id, is_active)
        except Exception as exc:
            self.notices.error(f"Failed to update product: {getattr(exc, 'message', exc)}")
            raise

        await self._log(PRODUCT_UPDATED, {"product_id": product_id, "is_active": is_active})
        self.notices.success("Product activated" if is_active else "Product deactivated")
        await self.stats.refresh(silent=True)
        return {"id": product_id, "is_active": is_active}


class DeleteProductUseCase(_ProductModeration):
    """Use case for deleting a product."""

    async def execute(self, product_id: str) -> None:
        """
        Delete a product.

        Raises:
            AuthorizationError: If the backend refuses the deletion
        """
        gateway = self.resolver.gateway_for("delete_product")
        try:
            await gateway.delete_product(product_id)
        except Exception as exc:
            self.notices.error(f"Failed to delete product: {getattr(exc, 'message', exc)}")
            raise

        await self._log(PRODUCT_DELETED, {"product_id": product_id})
        self.notices.success("Product deleted")
        await self.stats.refresh(silent=True)
