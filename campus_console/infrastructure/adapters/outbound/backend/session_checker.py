"""Session check adapter backed by the session procedures."""

import logging
from typing import Any

from campus_console.application.ports.outbound.session_check_port import SessionCheckResult
from campus_console.infrastructure.adapters.outbound.backend.mappers import first_row
from campus_console.infrastructure.adapters.outbound.backend.rest_client import BackendRestClient

logger = logging.getLogger(__name__)

MALFORMED_RESPONSE_REASON = "Malformed session check response"


def parse_session_check(data: Any) -> SessionCheckResult:
    """
    Interpret the result of ``sys_validate_admin_session``.

    Only an explicit boolean ``ok: true`` keeps the session alive; any
    other shape counts as a failed check.
    """
    row = first_row(data)
    if row is None or not isinstance(row.get("ok"), bool):
        logger.warning(f"Unexpected session check response: {data!r}")
        return SessionCheckResult(ok=False, reason=MALFORMED_RESPONSE_REASON)
    if row["ok"]:
        return SessionCheckResult(ok=True)
    return SessionCheckResult(ok=False, reason=row.get("reason") or "Session is no longer valid")


class BackendSessionChecker:
    """Validates and releases bypass sessions at the backend."""

    def __init__(self, client: BackendRestClient):
        self.client = client

    async def validate_session(self, secret: str, token: str) -> SessionCheckResult:
        data = await self.client.rpc(
            "sys_validate_admin_session", {"secret_key": secret, "s_token": token}
        )
        return parse_session_check(data)

    async def release_session(self, secret: str, token: str) -> None:
        await self.client.rpc("sys_release_admin_session", {"secret_key": secret, "s_token": token})
