"""
Remote-procedure implementation of BackendGatewayPort.

Every operation is a named procedure call carrying the shared bypass
secret as ``secret_key``. The backend authorizes the call by that secret,
not by the caller's identity. A rejected secret comes back as an error
and is raised as is; there is no retry through the table path.
"""

import logging
from datetime import datetime
from typing import Any, Optional

from campus_console.application.ports.outbound.backend_gateway_port import CallingConvention
from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.value_objects.role import Role
from campus_console.infrastructure.adapters.outbound.backend.mappers import (
    ActivityLogMapper,
    IdentityMapper,
    SellerApplicationMapper,
    SellerProfileMapper,
    first_row,
    format_datetime,
)
from campus_console.infrastructure.adapters.outbound.backend.rest_client import BackendRestClient

logger = logging.getLogger(__name__)


class RemoteProcedureGateway:
    """Backend gateway using secret-authenticated procedures."""

    convention = CallingConvention.REMOTE_PROCEDURE

    def __init__(self, client: BackendRestClient, secret: str):
        """
        Initialize gateway.

        Args:
            client: REST client for the backend
            secret: Shared bypass secret
        """
        if not secret:
            raise ValueError("Remote-procedure gateway requires a secret")
        self.client = client
        self._secret = secret

    def __repr__(self) -> str:
        return "RemoteProcedureGateway(secret=***)"

    async def get_identity(self, identity_id: str) -> Optional[Identity]:
        row = first_row(await self._call("sys_get_profile", target_id=identity_id))
        return IdentityMapper.to_entity(row) if row else None

    async def list_applications(
        self, status: Optional[ApplicationStatus] = None, limit: int = 100
    ) -> list[SellerApplication]:
        rows = await self._call(
            "sys_get_seller_applications",
            status_filter=status.value if status else None,
            max_rows=limit,
        )
        return [SellerApplicationMapper.to_entity(row) for row in rows or []]

    async def update_application_status(
        self,
        application_id: str,
        status: ApplicationStatus,
        reviewed_at: datetime,
        reviewed_by: Optional[str] = None,
        rejection_reason: Optional[str] = None,
    ) -> None:
        await self._call(
            "sys_update_seller_application",
            application_id=application_id,
            new_status=status.value,
            reviewed_at=format_datetime(reviewed_at),
            reviewed_by=reviewed_by,
            rejection_reason=rejection_reason if status is ApplicationStatus.REJECTED else None,
        )

    async def update_identity_role(self, identity_id: str, role: Role) -> None:
        await self._call("admin_update_user_role", target_user_id=identity_id, new_role=role.value)

    async def upsert_seller_profile(self, profile: SellerProfile) -> None:
        await self._call("sys_upsert_seller_profile", profile_data=SellerProfileMapper.to_row(profile))

    async def append_activity_log(self, entry: ActivityLogEntry) -> None:
        row = ActivityLogMapper.to_row(entry)
        await self._call(
            "sys_log_activity",
            actor_id=row["user_id"],
            action_type=row["action_type"],
            action_details=row["action_details"],
        )

    async def set_platform_setting(self, key: str, value: Any) -> None:
        await self._call("sys_update_platform_setting", setting_key=key, setting_value=value)

    async def list_platform_settings(self) -> dict[str, Any]:
        rows = await self._call("sys_get_platform_settings")
        if isinstance(rows, dict):
            return dict(rows)
        return {row["key"]: row.get("value") for row in rows or []}

    async def set_product_active(self, product_id: str, is_active: bool) -> None:
        await self._call(
            "admin_update_product", product_id=product_id, product_data={"is_active": is_active}
        )

    async def delete_product(self, product_id: str) -> None:
        await self._call("admin_delete_product", target_id=product_id)

    async def list_sellers(self) -> list[Identity]:
        rows = await self._call("sys_get_sellers_list")
        return [IdentityMapper.to_entity({"role": Role.SELLER.value, **row}) for row in rows or []]

    async def _call(self, procedure: str, **params: Any) -> Any:
        logger.debug(f"Calling {procedure}")
        return await self.client.rpc(procedure, {"secret_key": self._secret, **params})
