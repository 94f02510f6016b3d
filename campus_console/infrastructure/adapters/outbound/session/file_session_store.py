"""Local persistence for the bypass session."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from campus_console.domain.value_objects.bypass_session import BypassSession

logger = logging.getLogger(__name__)

BYPASS_FLAG_KEY = "sys_admin_bypass"
SECRET_KEY = "sys_admin_secret"
TOKEN_KEY = "sys_admin_session_token"


class FileSessionStore:
    """
    Keeps the bypass flag, secret and token as three strings in a JSON file.

    A missing file, or a file without the flag, means no bypass session.
    The file is only ever readable by its owner.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> Optional[BypassSession]:
        if not self.path.exists():
            return None
        try:
            values = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning(f"Ignoring unreadable session file {self.path}", exc_info=True)
            return None
        if not isinstance(values, dict):
            return None

        enabled = str(values.get(BYPASS_FLAG_KEY, "")).lower() == "true"
        secret = str(values.get(SECRET_KEY) or "")
        token = str(values.get(TOKEN_KEY) or "")
        if not enabled and not secret and not token:
            return None
        return BypassSession(enabled=enabled, secret=secret, token=token)

    def save(self, session: BypassSession) -> None:
        values = {
            BYPASS_FLAG_KEY: "true" if session.enabled else "false",
            SECRET_KEY: session.secret,
            TOKEN_KEY: session.token,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # O_CREAT only applies the mode to new files
        os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as file:
            json.dump(values, file)
        logger.debug(f"Bypass session saved to {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.debug(f"Bypass session cleared from {self.path}")


class InMemorySessionStore:
    """Session store that lives only as long as the process."""

    def __init__(self, session: Optional[BypassSession] = None):
        self._session = session

    def load(self) -> Optional[BypassSession]:
        return self._session

    def save(self, session: BypassSession) -> None:
        self._session = session

    def clear(self) -> None:
        self._session = None
