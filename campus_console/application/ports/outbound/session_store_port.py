"""Local bypass-session storage port interface."""

from typing import Optional, Protocol

from campus_console.domain.value_objects.bypass_session import BypassSession


class SessionStorePort(Protocol):
    """Persist the bypass flag, secret and token outside the backend."""

    def load(self) -> Optional[BypassSession]:
        """Return the stored session, or None when nothing is stored."""
        ...

    def save(self, session: BypassSession) -> None:
        """Store the session, replacing any previous one."""
        ...

    def clear(self) -> None:
        """Remove flag, secret and token."""
        ...
