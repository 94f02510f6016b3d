"""
Direct-table implementation of BackendGatewayPort.

Runs every operation as a plain table request authenticated as the
operator's own identity. Whether a request is allowed is decided by the
backend's row-level policies. A denied update or delete does not fail at
the HTTP level; it simply matches no rows, so an empty result is reported
as an authorization failure.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from campus_console.application.exceptions import AuthorizationError
from campus_console.application.ports.outbound.backend_gateway_port import CallingConvention
from campus_console.application.ports.outbound.query import Collection, Filter, Order
from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.value_objects.role import SELLER_CLASS_ROLES, Role
from campus_console.infrastructure.adapters.outbound.backend.mappers import (
    ActivityLogMapper,
    IdentityMapper,
    SellerApplicationMapper,
    SellerProfileMapper,
)
from campus_console.infrastructure.adapters.outbound.backend.rest_client import BackendRestClient

logger = logging.getLogger(__name__)

APPLICATION_COLUMNS = "*,profiles:user_id(full_name,email)"
SELLER_COLUMNS = "id,full_name,email,phone,role,faculty,department,created_at"


class DirectTableGateway:
    """Backend gateway using table operations under row-level security."""

    convention = CallingConvention.DIRECT_TABLE

    def __init__(self, client: BackendRestClient):
        """
        Initialize gateway.

        Args:
            client: REST client authenticated with the operator's token
        """
        self.client = client

    async def get_identity(self, identity_id: str) -> Optional[Identity]:
        rows = await self.client.select(
            Collection.IDENTITIES.value, filters=[Filter.eq("id", identity_id)], limit=1
        )
        return IdentityMapper.to_entity(rows[0]) if rows else None

    async def list_applications(
        self, status: Optional[ApplicationStatus] = None, limit: int = 100
    ) -> list[SellerApplication]:
        filters = [Filter.eq("status", status.value)] if status else None
        rows = await self.client.select(
            Collection.SELLER_APPLICATIONS.value,
            columns=APPLICATION_COLUMNS,
            filters=filters,
            order=Order("updated_at", ascending=False),
            limit=limit,
        )
        return [SellerApplicationMapper.to_entity(row) for row in rows]

    async def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        reviewed_at: datetime,
        reviewed_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        values = SellerApplicationMapper.to_status_update(
            status, reviewed_at, reviewed_by, rejection_reason
        )
        await self._update(
            Collection.SELLER_APPLICATIONS, values, [Filter.eq("id", application_id)]
        )

    async def update_identity_role(self, identity_id: str, role: Role) -> None:
        await self._update(
            Collection.IDENTITIES, {"role": role.value}, [Filter.eq("id", identity_id)]
        )

    async def upsert_seller_profile(self, profile: SellerProfile) -> None:
        await self.client.upsert(
            Collection.SELLER_PROFILES.value,
            SellerProfileMapper.to_row(profile),
            on_conflict="user_id",
        )

    async def append_activity_log(self, entry: ActivityLogEntry) -> None:
        await self.client.insert(Collection.ACTIVITY_LOGS.value, ActivityLogMapper.to_row(entry))

    async def set_platform_setting(self, key: str, value: Any) -> None:
        """Insert the setting if it does not exist yet, otherwise update it."""
        existing = await self.client.select(
            Collection.PLATFORM_SETTINGS.value,
            columns="key",
            filters=[Filter.eq("key", key)],
            limit=1,
        )
        if not existing:
            await self.client.insert(
                Collection.PLATFORM_SETTINGS.value, {"key": key, "value": value}
            )
            return
        await self._update(Collection.PLATFORM_SETTINGS, {"value": value}, [Filter.eq("key", key)])

    async def list_platform_settings(self) -> dict[str, Any]:
        rows = await self.client.select(Collection.PLATFORM_SETTINGS.value, columns="key,value")
        return {row["key"]: row.get("value") for row in rows}

    async def set_product_active(self, product_id: str, is_active: bool) -> None:
        await self._update(
            Collection.PRODUCTS, {"is_active": is_active}, [Filter.eq("id", product_id)]
        )

    async def delete_product(self, product_id: str) -> None:
        rows = await self.client.delete(Collection.PRODUCTS.value, [Filter.eq("id", product_id)])
        if not rows:
            raise self._denied(Collection.PRODUCTS, "delete")

    async def list_sellers(self) -> list[Identity]:
        rows = await self.client.select(
            Collection.IDENTITIES.value,
            columns=SELLER_COLUMNS,
            filters=[Filter.is_in("role", sorted(role.value for role in SELLER_CLASS_ROLES))],
            order=Order("full_name"),
        )
        return [IdentityMapper.to_entity(row) for row in rows]

    async def _update(
        self, collection: Collection, values: dict[str, Any], filters: list[Filter]
    ) -> list[dict[str, Any]]:
        rows = await self.client.update(collection.value, values, filters)
        if not rows:
            raise self._denied(collection, "update")
        return rows

    def _denied(self, collection: Collection, verb: str) -> AuthorizationError:
        logger.warning(f"{verb} on {collection.value} matched no rows")
        return AuthorizationError(
            f"Permission denied: {verb} on {collection.value} was not allowed for this account",
            convention=self.convention.value,
            operation=collection.value,
        )
