"""
Dashboard statistics.

A refresh issues a fixed batch of independent reads together and builds a
new DashboardSnapshot from their results. Each read is one slice of the
snapshot; a failing slice falls back to its zero value and never aborts the
others. The previous snapshot is always replaced as a whole.

Refreshes overlap freely. Every refresh takes a sequence number when it is
issued, and a refresh that resolves after a later-issued one has already
been applied is discarded, so a slow early refresh cannot overwrite a
fresher snapshot.
"""

import asyncio
import logging
from collections import Counter
from contextlib import suppress
from datetime import date, datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Iterable, Optional

from campus_console.application.ports.outbound.query import Collection, Filter
from campus_console.application.ports.outbound.realtime_feed_port import (
    ChangeEvent,
    RealtimeFeedPort,
    Subscription,
)
from campus_console.application.ports.outbound.sms_sender_port import SmsSenderPort
from campus_console.application.ports.outbound.stats_reader_port import StatsReaderPort
from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.domain.entities.dashboard_snapshot import DashboardSnapshot
from campus_console.domain.entities.seller_application import ApplicationStatus
from campus_console.domain.value_objects.role import (
    ADMIN_CLASS_ROLES,
    PUBLISHING_ROLES,
    SELLER_CLASS_ROLES,
    Role,
)

logger = logging.getLogger(__name__)

TOP_N = 6
GROWTH_DAYS = 7
RECENT_ACTIVITY_WINDOW = timedelta(hours=24)

WATCHED_COLLECTIONS = [
    Collection.SELLER_APPLICATIONS,
    Collection.PRODUCTS,
    Collection.ACTIVITY_LOGS,
]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def top_counts(values: Iterable[Any], limit: int = TOP_N) -> list[tuple[str, int]]:
    """
    Count occurrences and keep the most frequent ones.

    Empty values are ignored. Ties keep first-seen order.

    Args:
        values: Raw column values
        limit: Number of entries to keep

    Returns:
        (value, count) pairs sorted by descending count
    """
    counter = Counter(str(value).strip() for value in values if value and str(value).strip())
    return counter.most_common(limit)


def day_label(day: date) -> str:
    """Format a calendar day as a short month/day label, e.g. ``Oct 18``."""
    return f"{day:%b} {day.day}"


def bucket_by_day(
    timestamps: Iterable[Any], today: date, days: int = GROWTH_DAYS
) -> list[tuple[str, int]]:
    """
    Bucket timestamps per calendar day over the last ``days`` days.

    Every day in the window is present, oldest first, even when nothing
    happened on it. Timestamps outside the window or not parseable are
    skipped.

    Args:
        timestamps: ISO 8601 strings or datetimes
        today: Last day of the window
        days: Window length

    Returns:
        (label, count) pairs
    """
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    buckets: dict[date, int] = {day: 0 for day in window}

    for raw in timestamps:
        moment = _parse_timestamp(raw)
        if moment is None:
            continue
        day = moment.astimezone(timezone.utc).date()
        if day in buckets:
            buckets[day] += 1

    return [(day_label(day), buckets[day]) for day in window]


def _parse_timestamp(raw: Any) -> Optional[datetime]:
    if isinstance(raw, datetime):
        moment = raw
    elif isinstance(raw, str) and raw:
        try:
            moment = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _as_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


class StatsReconciler:
    """Builds and holds the dashboard snapshot."""

    def __init__(
        self,
        reader: StatsReaderPort,
        resolver: CredentialResolver,
        sms_sender: Optional[SmsSenderPort] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize reconciler.

        Args:
            reader: Read-only backend access for counts and selects
            resolver: Picks the gateway for platform settings
            sms_sender: SMS provider, for the balance slice
            clock: Source of the current time
        """
        self.snapshot = DashboardSnapshot.empty()
        self._reader = reader
        self._resolver = resolver
        self._sms_sender = sms_sender
        self._clock = clock
        self._issued = 0
        self._applied = 0
        self._loading_runs = 0
        self._tasks: list[asyncio.Task] = []
        self._subscription: Optional[Subscription[ChangeEvent]] = None

    @property
    def is_loading(self) -> bool:
        """True while a non-silent refresh is in flight."""
        return self._loading_runs > 0

    async def refresh(self, silent: bool = False) -> DashboardSnapshot:
        """
        Rebuild the snapshot.

        Args:
            silent: Do not touch the loading flag (used after mutations)

        Returns:
            The snapshot in force once this refresh resolved
        """
        self._issued += 1
        sequence = self._issued
        if not silent:
            self._loading_runs += 1

        try:
            snapshot = await self._build()
        finally:
            if not silent:
                self._loading_runs -= 1

        if sequence < self._applied:
            logger.info(
                f"Discarding stats refresh #{sequence}; refresh #{self._applied} already applied"
            )
            return self.snapshot

        self._applied = sequence
        self.snapshot = snapshot
        if snapshot.failed_slices:
            logger.warning(
                f"Stats refresh #{sequence} completed with failed slices: "
                f"{', '.join(snapshot.failed_slices)}"
            )
        else:
            logger.debug(f"Stats refresh #{sequence} completed")
        return snapshot

    async def start(
        self,
        feed: Optional[RealtimeFeedPort] = None,
        poll_interval_seconds: float = 30.0,
    ) -> None:
        """
        Load the first snapshot and keep it fresh.

        Refreshes again every poll interval and on every change in the
        watched collections.
        """
        await self.refresh()
        self._tasks.append(
            asyncio.create_task(self._poll(poll_interval_seconds), name="stats-poll")
        )
        if feed is not None:
            self._subscription = feed.subscribe_changes(WATCHED_COLLECTIONS)
            self._tasks.append(
                asyncio.create_task(self._follow_changes(self._subscription), name="stats-changes")
            )

    async def stop(self) -> None:
        """Stop polling and unsubscribe from change events."""
        if self._subscription is not None:
            await self._subscription.unsubscribe()
            self._subscription = None

        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            with suppress(asyncio.CancelledError):
                await task

    async def _poll(self, interval_seconds: float) -> None:
        while True:
            await asyncio.sleep(interval_seconds)
            await self.refresh()

    async def _follow_changes(self, subscription: Subscription[ChangeEvent]) -> None:
        async for event in subscription:
            logger.debug(f"Change in {event.collection.value}; refreshing stats")
            await self.refresh()

    async def _build(self) -> DashboardSnapshot:
        now = self._clock()
        slices: dict[str, tuple[Awaitable[Any], Any]] = {
            "total_users": (self._count(Collection.IDENTITIES), 0),
            "buyers": (self._count_roles([Role.BUYER]), 0),
            "sellers": (self._count_roles(SELLER_CLASS_ROLES), 0),
            "publishers": (self._count_roles(PUBLISHING_ROLES), 0),
            "admins": (self._count_roles(ADMIN_CLASS_ROLES), 0),
            "total_applications": (self._count(Collection.SELLER_APPLICATIONS), 0),
            "pending_applications": (self._count_status(ApplicationStatus.PENDING), 0),
            "approved_applications": (self._count_status(ApplicationStatus.APPROVED), 0),
            "rejected_applications": (self._count_status(ApplicationStatus.REJECTED), 0),
            "cancelled_applications": (self._count_status(ApplicationStatus.CANCELLED), 0),
            "total_products": (self._count(Collection.PRODUCTS), 0),
            "active_products": (self._count(Collection.PRODUCTS, [Filter.eq("is_active", True)]), 0),
            "inactive_products": (
                self._count(Collection.PRODUCTS, [Filter.eq("is_active", False)]),
                0,
            ),
            "top_categories": (self._top(Collection.PRODUCTS, "category"), []),
            "user_growth": (self._user_growth(now), []),
            "top_faculties": (self._top(Collection.IDENTITIES, "faculty"), []),
            "top_departments": (self._top(Collection.IDENTITIES, "department"), []),
            "settings": (self._settings(), {}),
            "sms_balance": (self._sms_balance(), 0.0),
            "recent_activity": (
                self._count(
                    Collection.ACTIVITY_LOGS,
                    [Filter.gte("created_at", (now - RECENT_ACTIVITY_WINDOW).isoformat())],
                ),
                0,
            ),
        }

        names = list(slices)
        results = await asyncio.gather(
            *(self._isolated(name, *slices[name]) for name in names)
        )

        values: dict[str, Any] = {}
        failed: list[str] = []
        for name, (ok, value) in zip(names, results):
            values[name] = value
            if not ok:
                failed.append(name)

        return DashboardSnapshot(
            **values,
            subscriptions_enabled=_as_flag(values["settings"].get("subscriptions_enabled")),
            failed_slices=tuple(failed),
            generated_at=now,
        )

    async def _isolated(self, name: str, read: Awaitable[Any], default: Any) -> tuple[bool, Any]:
        try:
            return True, await read
        except Exception:
            logger.warning(f"Stats slice '{name}' failed; using default", exc_info=True)
            return False, default

    async def _count(self, collection: Collection, filters: Optional[list[Filter]] = None) -> int:
        return await self._reader.count(collection, filters)

    async def _count_roles(self, roles: Iterable[Role]) -> int:
        values = sorted(role.value for role in roles)
        if len(values) == 1:
            return await self._count(Collection.IDENTITIES, [Filter.eq("role", values[0])])
        return await self._count(Collection.IDENTITIES, [Filter.is_in("role", values)])

    async def _count_status(self, status: ApplicationStatus) -> int:
        return await self._count(Collection.SELLER_APPLICATIONS, [Filter.eq("status", status.value)])

    async def _top(self, collection: Collection, column: str) -> list[tuple[str, int]]:
        rows = await self._reader.select(collection, columns=column)
        return top_counts(row.get(column) for row in rows)

    async def _user_growth(self, now: datetime) -> list[tuple[str, int]]:
        today = now.astimezone(timezone.utc).date()
        since = datetime.combine(
            today - timedelta(days=GROWTH_DAYS - 1), datetime.min.time(), tzinfo=timezone.utc
        )
        rows = await self._reader.select(
            Collection.IDENTITIES,
            columns="created_at",
            filters=[Filter.gte("created_at", since.isoformat())],
        )
        return bucket_by_day((row.get("created_at") for row in rows), today)

    async def _settings(self) -> dict[str, Any]:
        gateway = self._resolver.gateway_for("list_platform_settings")
        return await gateway.list_platform_settings()

    async def _sms_balance(self) -> float:
        if self._sms_sender is None:
            return 0.0
        return await self._sms_sender.get_balance()
