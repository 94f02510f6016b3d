"""Unit tests for dashboard statistics."""

import asyncio
from datetime import date, datetime, timezone

import pytest

from campus_console.application.exceptions import ExternalServiceError
from campus_console.application.ports.outbound.query import Collection
from campus_console.application.services import StatsReconciler
from campus_console.application.services.stats_reconciler import bucket_by_day, top_counts


@pytest.fixture
def seeded_backend(backend):
    """Backend with a small marketplace."""
    for index, role in enumerate(["buyer", "buyer", "seller", "publisher_seller", "admin"]):
        backend.add_identity(
            f"user-{index}",
            role=role,
            faculty="Science" if index < 3 else "Arts",
            created_at="2026-10-17T08:00:00+00:00",
        )
    backend.add_application("app-1", "user-0", "Kicks", status="pending")
    backend.add_application("app-2", "user-1", "Bakes", status="approved")
    backend.add_application("app-3", "user-1", "Books", status="rejected")
    backend.tables[Collection.PRODUCTS].extend(
        [
            {"id": "p1", "is_active": True, "category": "Food"},
            {"id": "p2", "is_active": True, "category": "Food"},
            {"id": "p3", "is_active": False, "category": "Books"},
        ]
    )
    backend.tables[Collection.PLATFORM_SETTINGS].append(
        {"key": "subscriptions_enabled", "value": "true"}
    )
    return backend


@pytest.fixture
def reconciler(seeded_backend, resolver, sms_sender, fixed_now):
    return StatsReconciler(seeded_backend, resolver, sms_sender, clock=lambda: fixed_now)


class TestTopCounts:
    """Test frequency ranking."""

    def test_keeps_six_most_frequent(self):
        values = ["a"] * 7 + ["b"] * 6 + ["c"] * 5 + ["d"] * 4 + ["e"] * 3 + ["f"] * 2 + ["g"]

        assert top_counts(values) == [("a", 7), ("b", 6), ("c", 5), ("d", 4), ("e", 3), ("f", 2)]

    def test_ignores_empty_values(self):
        assert top_counts(["x", None, "", "  ", "x"]) == [("x", 2)]


class TestBucketByDay:
    """Test per-day growth buckets."""

    def test_seven_labelled_days_oldest_first(self):
        buckets = bucket_by_day([], today=date(2026, 10, 18))

        assert [label for label, _ in buckets] == [
            "Oct 12", "Oct 13", "Oct 14", "Oct 15", "Oct 16", "Oct 17", "Oct 18",
        ]
        assert all(count == 0 for _, count in buckets)

    def test_counts_timestamps_in_window(self):
        buckets = bucket_by_day(
            [
                "2026-10-18T01:00:00+00:00",
                "2026-10-18T23:00:00+00:00",
                datetime(2026, 10, 12, tzinfo=timezone.utc),
                "2026-10-01T00:00:00+00:00",
                "not a date",
            ],
            today=date(2026, 10, 18),
        )

        assert buckets[0] == ("Oct 12", 1)
        assert buckets[-1] == ("Oct 18", 2)


class TestStatsRefresh:
    """Test snapshot building."""

    @pytest.mark.asyncio
    async def test_refresh_builds_snapshot(self, reconciler, fixed_now):
        # Act
        snapshot = await reconciler.refresh()

        # Assert
        assert snapshot.total_users == 5
        assert snapshot.buyers == 2
        assert snapshot.sellers == 2
        assert snapshot.publishers == 1
        assert snapshot.admins == 1
        assert snapshot.total_applications == 3
        assert snapshot.pending_applications == 1
        assert snapshot.approved_applications == 1
        assert snapshot.rejected_applications == 1
        assert snapshot.cancelled_applications == 0
        assert snapshot.total_products == 3
        assert snapshot.active_products == 2
        assert snapshot.inactive_products == 1
        assert snapshot.top_categories == [("Food", 2), ("Books", 1)]
        assert snapshot.top_faculties == [("Science", 3), ("Arts", 2)]
        assert snapshot.user_growth[-2] == ("Oct 17", 5)
        assert snapshot.subscriptions_enabled is True
        assert snapshot.sms_balance == 120.0
        assert snapshot.failed_slices == ()
        assert snapshot.generated_at == fixed_now
        assert reconciler.snapshot is snapshot

    @pytest.mark.asyncio
    async def test_failing_slice_defaults_without_affecting_others(
        self, reconciler, seeded_backend
    ):
        # Arrange
        seeded_backend.fail("stats:products", ExternalServiceError("products unavailable"))

        # Act
        snapshot = await reconciler.refresh()

        # Assert
        assert snapshot.total_products == 0
        assert snapshot.active_products == 0
        assert snapshot.top_categories == []
        assert "total_products" in snapshot.failed_slices
        assert snapshot.total_users == 5
        assert snapshot.pending_applications == 1

    @pytest.mark.asyncio
    async def test_failing_slice_replaces_previous_value_with_zero(
        self, reconciler, seeded_backend
    ):
        # Arrange
        first = await reconciler.refresh()
        seeded_backend.fail("stats:products", ExternalServiceError("products unavailable"))

        # Act
        second = await reconciler.refresh()

        # Assert
        assert first.total_products == 3
        assert second.total_products == 0
        assert second.top_categories == []
        assert second.total_users == first.total_users
        assert reconciler.snapshot is second

    @pytest.mark.asyncio
    async def test_settings_failure_disables_subscriptions_flag(self, reconciler, seeded_backend):
        seeded_backend.fail("list_platform_settings", ExternalServiceError("boom"))

        snapshot = await reconciler.refresh()

        assert snapshot.settings == {}
        assert snapshot.subscriptions_enabled is False
        assert snapshot.failed_slices == ("settings",)

    @pytest.mark.asyncio
    async def test_loading_flag_only_for_loud_refresh(self, reconciler):
        # Arrange
        seen = []
        original = reconciler._build

        async def observing_build():
            seen.append(reconciler.is_loading)
            return await original()

        reconciler._build = observing_build

        # Act
        await reconciler.refresh()
        await reconciler.refresh(silent=True)

        # Assert
        assert seen == [True, False]
        assert reconciler.is_loading is False

    @pytest.mark.asyncio
    async def test_late_refresh_is_discarded(self, reconciler, seeded_backend):
        """Test an earlier refresh resolving last does not overwrite a newer snapshot."""
        # Arrange
        gate = asyncio.Event()
        original = reconciler._build
        calls = 0

        async def gated_build():
            nonlocal calls
            calls += 1
            if calls == 1:
                await gate.wait()
            return await original()

        reconciler._build = gated_build
        slow = asyncio.create_task(reconciler.refresh())
        await asyncio.sleep(0)

        # Act
        fresh = await reconciler.refresh()
        seeded_backend.add_identity("user-late")
        gate.set()
        result = await slow

        # Assert
        assert reconciler.snapshot is fresh
        assert result is fresh
        assert fresh.total_users == 5
