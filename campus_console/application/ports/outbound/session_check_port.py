"""Bypass session check port interface."""

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class SessionCheckResult:
    """Answer of the backend's session check procedure."""

    ok: bool
    reason: Optional[str] = None


class SessionCheckPort(Protocol):
    """Validate and release bypass sessions at the backend."""

    async def validate_session(self, secret: str, token: str) -> SessionCheckResult:
        """
        Ask the backend whether the session is still the authoritative one.

        Args:
            secret: Shared bypass secret
            token: Server-issued session token

        Returns:
            Check result; ``ok`` is True only on an explicit success

        Raises:
            ExternalServiceError: On transport failure
        """
        ...

    async def release_session(self, secret: str, token: str) -> None:
        """Tell the backend the session ended so another login may take over."""
        ...
