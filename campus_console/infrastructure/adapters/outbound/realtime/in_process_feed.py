"""
In-process realtime feed.

Events relayed from the backend's streaming channel (presence and table
changes) are published here and fanned out to every open subscription.
Each subscription owns an asyncio.Queue; unsubscribing closes it and ends
iteration once already queued events are drained.
"""

import asyncio
import logging
from typing import AsyncIterator, Generic, Optional, TypeVar

from campus_console.application.ports.outbound.query import Collection
from campus_console.application.ports.outbound.realtime_feed_port import ChangeEvent
from campus_console.domain.entities.presence import MembershipEvent

logger = logging.getLogger(__name__)

EventT = TypeVar("EventT")

_CLOSED = object()


class QueueSubscription(Generic[EventT]):
    """Subscription backed by an unbounded queue."""

    def __init__(self, feed: "InProcessRealtimeFeed", collections: Optional[frozenset[Collection]] = None):
        self._feed = feed
        self._queue: asyncio.Queue = asyncio.Queue()
        self.collections = collections
        self.closed = False

    def deliver(self, event: EventT) -> None:
        if not self.closed:
            self._queue.put_nowait(event)

    def __aiter__(self) -> AsyncIterator[EventT]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[EventT]:
        while True:
            event = await self._queue.get()
            if event is _CLOSED:
                return
            yield event

    async def unsubscribe(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._feed.remove(self)
        self._queue.put_nowait(_CLOSED)


class InProcessRealtimeFeed:
    """RealtimeFeedPort implementation fed by ``publish_*`` calls."""

    def __init__(self) -> None:
        self._presence: list[QueueSubscription[MembershipEvent]] = []
        self._changes: list[QueueSubscription[ChangeEvent]] = []

    def subscribe_presence(self) -> QueueSubscription[MembershipEvent]:
        subscription: QueueSubscription[MembershipEvent] = QueueSubscription(self)
        self._presence.append(subscription)
        return subscription

    def subscribe_changes(self, collections: list[Collection]) -> QueueSubscription[ChangeEvent]:
        subscription: QueueSubscription[ChangeEvent] = QueueSubscription(
            self, frozenset(collections)
        )
        self._changes.append(subscription)
        return subscription

    def publish_presence(self, event: MembershipEvent) -> int:
        """Deliver a presence event; returns the number of subscribers reached."""
        for subscription in self._presence:
            subscription.deliver(event)
        return len(self._presence)

    def publish_change(self, event: ChangeEvent) -> int:
        """Deliver a change event to subscriptions watching its collection."""
        delivered = 0
        for subscription in self._changes:
            if subscription.collections is None or event.collection in subscription.collections:
                subscription.deliver(event)
                delivered += 1
        if not delivered:
            logger.debug(f"No subscriber for changes in {event.collection.value}")
        return delivered

    def remove(self, subscription: QueueSubscription) -> None:
        for subscriptions in (self._presence, self._changes):
            if subscription in subscriptions:
                subscriptions.remove(subscription)

    @property
    def subscriber_count(self) -> int:
        return len(self._presence) + len(self._changes)
