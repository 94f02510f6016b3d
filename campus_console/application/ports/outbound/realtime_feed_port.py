"""Realtime feed port interface."""

from dataclasses import dataclass
from typing import AsyncIterator, Protocol, TypeVar

from campus_console.application.ports.outbound.query import Collection
from campus_console.domain.entities.presence import MembershipEvent

EventT = TypeVar("EventT", covariant=True)


@dataclass(frozen=True)
class ChangeEvent:
    """A row in a watched collection was inserted, updated or deleted."""

    collection: Collection
    event_type: str = "*"


class Subscription(Protocol[EventT]):
    """Async stream of events that must be unsubscribed on teardown."""

    def __aiter__(self) -> AsyncIterator[EventT]:
        ...

    async def unsubscribe(self) -> None:
        """Stop delivery; iteration ends after pending events are drained."""
        ...


class RealtimeFeedPort(Protocol):
    """Source of presence and collection-change events."""

    def subscribe_presence(self) -> Subscription[MembershipEvent]:
        """Subscribe to presence sync/join events."""
        ...

    def subscribe_changes(self, collections: list[Collection]) -> Subscription[ChangeEvent]:
        """Subscribe to change notifications for the given collections."""
        ...
