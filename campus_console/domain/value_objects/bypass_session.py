"""Bypass session value object."""

from dataclasses import dataclass

from campus_console.domain.exceptions import IncompleteBypassSessionError


@dataclass(frozen=True)
class BypassSession:
    """
    Secret-and-token credential for the system bypass identity.

    Immutable. A session is created at login, held by the session context
    and destroyed on logout or when the heartbeat revokes it.
    """

    enabled: bool
    secret: str
    token: str = ""

    @classmethod
    def start(cls, secret: str, token: str) -> "BypassSession":
        """
        Create an enabled session from freshly issued credentials.

        Raises:
            IncompleteBypassSessionError: If secret or token is empty
        """
        if not secret or not secret.strip():
            raise IncompleteBypassSessionError("secret")
        if not token or not token.strip():
            raise IncompleteBypassSessionError("token")
        return cls(enabled=True, secret=secret.strip(), token=token.strip())

    @property
    def grants_bypass(self) -> bool:
        """Flag set and a non-empty secret present."""
        return self.enabled and bool(self.secret)

    @property
    def is_monitorable(self) -> bool:
        """Flag, secret and token all present."""
        return self.grants_bypass and bool(self.token)

    def __repr__(self) -> str:
        return f"BypassSession(enabled={self.enabled}, token_set={bool(self.token)})"
