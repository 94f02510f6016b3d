"""Live presence counts from the membership feed."""

import asyncio
import logging
from contextlib import suppress
from typing import Optional

from campus_console.application.ports.outbound.realtime_feed_port import (
    RealtimeFeedPort,
    Subscription,
)
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.domain.entities.presence import (
    JoinEvent,
    MembershipEvent,
    PresenceCounts,
    PresenceMember,
    SyncEvent,
)

logger = logging.getLogger(__name__)


class PresenceAggregator:
    """
    Keeps role-bucketed counts of connected identities.

    Only sync events change the counts; each one replaces the roster as a
    whole. Join events announce a newcomer and leave the counts alone until
    the next sync includes it.
    """

    def __init__(self, own_identity_id: Optional[str], notices: OperatorNotices):
        """
        Initialize aggregator.

        Args:
            own_identity_id: Operator's identity id, never announced on join
            notices: Operator notices for join announcements
        """
        self.counts = PresenceCounts()
        self.members: dict[str, PresenceMember] = {}
        self._own_identity_id = own_identity_id
        self._notices = notices
        self._subscription: Optional[Subscription[MembershipEvent]] = None
        self._task: Optional[asyncio.Task] = None

    def handle(self, event: MembershipEvent) -> PresenceCounts:
        """
        Apply one membership event.

        Args:
            event: Sync or join event

        Returns:
            Counts after the event
        """
        if isinstance(event, SyncEvent):
            self.members = dict(event.members)
            self.counts = PresenceCounts.from_members(self.members)
            logger.debug(f"Presence sync: {self.counts}")
        elif isinstance(event, JoinEvent):
            self._announce(event.member)
        else:
            logger.warning(f"Ignoring unknown presence event: {event!r}")
        return self.counts

    async def consume(self, subscription: Subscription[MembershipEvent]) -> None:
        """Apply events from a subscription until it ends."""
        async for event in subscription:
            self.handle(event)

    def start(self, feed: RealtimeFeedPort) -> None:
        """Subscribe to the feed and consume it in the background."""
        self._subscription = feed.subscribe_presence()
        self._task = asyncio.create_task(self.consume(self._subscription), name="presence")

    async def stop(self) -> None:
        """Unsubscribe and wait for the consumer to finish."""
        if self._subscription is not None:
            await self._subscription.unsubscribe()
            self._subscription = None

        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    def _announce(self, member: PresenceMember) -> None:
        if self._own_identity_id and member.identity_id == self._own_identity_id:
            return
        name = member.display_name or "A user"
        self._notices.info(f"{name} ({member.role}) just came online")
