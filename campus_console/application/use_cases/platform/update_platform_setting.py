"""Update platform setting use case."""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from campus_console.application.exceptions import ValidationError
from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.stats_reconciler import StatsReconciler
from campus_console.domain.entities.activity_log import SETTING_UPDATED, ActivityLogEntry
from campus_console.domain.value_objects.identity_ref import reviewer_reference

logger = logging.getLogger(__name__)


class UpdatePlatformSettingUseCase:
    """Use case for changing a platform-wide setting such as subscriptions_enabled."""

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

    async def execute(self, key: str, value: Any) -> dict[str, Any]:
        """
        Set a platform setting.

        Args:
            key: Setting key
            value: New value

        Returns:
            The setting as written

        Raises:
            ValidationError: If the key is empty
            AuthorizationError: If the backend refuses the change
        """
        key = (key or "").strip()
        if not key:
            raise ValidationError("Setting key cannot be empty", field="key")

        gateway = self.resolver.gateway_for("set_platform_setting")
        try:
            await gateway.set_platform_setting(key, value)
        except Exception as exc:
            self.notices.error(f"Failed to update setting: {getattr(exc, 'message', exc)}")
            raise

        await self._log(key, value)
        self.notices.success(f"Setting '{key}' updated")
        await self.stats.refresh(silent=True)
        return {"key": key, "value": value}

    async def _log(self, key: str, value: Any) -> None:
        entry = ActivityLogEntry(
            actor_id=reviewer_reference(self.operator_id),
            action_type=SETTING_UPDATED,
            details={"key": key, "value": value},
            created_at=datetime.now(timezone.utc),
        )
        try:
            await self.resolver.gateway_for("append_activity_log").append_activity_log(entry)
        except Exception:
            logger.error(f"Failed to log update of setting '{key}'", exc_info=True)
