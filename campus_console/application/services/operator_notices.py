"""Operator-visible notices."""

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

logger = logging.getLogger(__name__)


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    """A message shown to the operator."""

    level: NoticeLevel
    message: str
    created_at: datetime


class OperatorNotices:
    """
    Bounded feed of notices for the operator.

    Blocking failures and completed actions end up here. Best-effort
    failures do not; they only go to the log.
    """

    def __init__(self, max_items: int = 50):
        self._items: deque[Notice] = deque(maxlen=max_items)

    def success(self, message: str) -> Notice:
        return self._push(NoticeLevel.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self._push(NoticeLevel.ERROR, message)

    def info(self, message: str) -> Notice:
        return self._push(NoticeLevel.INFO, message)

    def recent(self, limit: int | None = None) -> list[Notice]:
        """Return notices, newest first."""
        items = list(reversed(self._items))
        return items[:limit] if limit is not None else items

    def latest(self) -> Notice | None:
        return self._items[-1] if self._items else None

    def _push(self, level: NoticeLevel, message: str) -> Notice:
        notice = Notice(level=level, message=message, created_at=datetime.now(timezone.utc))
        self._items.append(notice)
        log = logger.warning if level is NoticeLevel.ERROR else logger.info
        log(f"Operator notice [{level.value}]: {message}")
        return notice
