"""
Integration tests for the console API routes.

Routes run against a console wired to the in-memory backend.
"""

import asyncio

import pytest
from httpx import AsyncClient

from campus_console.application.exceptions import AuthorizationError
from campus_console.application.ports.outbound.query import Collection
from campus_console.application.ports.outbound.session_check_port import SessionCheckResult


@pytest.fixture
def seeded(backend):
    backend.add_identity("user-1", role="buyer", full_name="Kofi Mensah")
    backend.add_application("app-1", "user-1", "Kofi's Kicks", contact_phone="0241234567")
    backend.add_application("app-2", "user-1", "Kofi's Books", status="rejected")
    backend.tables[Collection.PRODUCTS].append({"id": "p1", "is_active": True, "category": "Food"})
    return backend


class TestHealthRoutes:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, async_client: AsyncClient):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_ready_before_first_refresh(self, async_client: AsyncClient):
        response = await async_client.get("/health/ready")

        assert response.json()["status"] == "degraded"
        assert response.json()["checks"]["heartbeat"] == "idle"


class TestApplicationRoutes:
    """Tests for /api/v1/applications."""

    @pytest.mark.asyncio
    async def test_list_applications(self, async_client: AsyncClient, seeded):
        response = await async_client.get("/api/v1/applications", params={"status": "pending"})

        assert response.status_code == 200
        data = response.json()
        assert [item["id"] for item in data["items"]] == ["app-1"]
        assert data["counts"]["rejected"] == 1

    @pytest.mark.asyncio
    async def test_approve_application(self, async_client: AsyncClient, seeded, sms_sender):
        # Arrange
        await async_client.get("/api/v1/applications")

        # Act
        response = await async_client.post("/api/v1/applications/app-1/approve")

        # Assert
        assert response.status_code == 200
        assert response.json()["status"] == "approved"
        assert seeded.rows(Collection.IDENTITIES, id="user-1")[0]["role"] == "seller"
        assert len(sms_sender.sent) == 1

    @pytest.mark.asyncio
    async def test_approve_twice_conflicts(self, async_client: AsyncClient, seeded):
        await async_client.get("/api/v1/applications")
        await async_client.post("/api/v1/applications/app-1/approve")

        response = await async_client.post("/api/v1/applications/app-1/approve")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    @pytest.mark.asyncio
    async def test_approve_unknown_application(self, async_client: AsyncClient, seeded):
        response = await async_client.post("/api/v1/applications/missing/approve")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_refused_step_returns_backend_message(self, async_client: AsyncClient, seeded):
        # Arrange
        seeded.fail("update_identity_role", AuthorizationError("permission denied for table profiles"))
        await async_client.get("/api/v1/applications")

        # Act
        response = await async_client.post("/api/v1/applications/app-1/approve")

        # Assert
        assert response.status_code == 403
        body = response.json()
        assert body["error"]["message"] == "permission denied for table profiles"
        assert body["error"]["details"]["step"] == "persist_role"

        listing = await async_client.get(
            "/api/v1/applications", params={"status": "pending", "reload": "false"}
        )
        assert [item["id"] for item in listing.json()["items"]] == ["app-1"]

        retry = await async_client.post("/api/v1/applications/app-1/approve")
        assert retry.status_code == 403

    @pytest.mark.asyncio
    async def test_reject_with_reason(self, async_client: AsyncClient, seeded):
        await async_client.get("/api/v1/applications")

        response = await async_client.post(
            "/api/v1/applications/app-1/reject", json={"reason": "Incomplete"}
        )

        assert response.status_code == 200
        assert response.json()["rejection_reason"] == "Incomplete"

    @pytest.mark.asyncio
    async def test_reject_without_body(self, async_client: AsyncClient, seeded):
        await async_client.get("/api/v1/applications")

        response = await async_client.post("/api/v1/applications/app-1/reject")

        assert response.status_code == 200
        assert response.json()["status"] == "rejected"


class TestSessionRoutes:
    """Tests for bypass session endpoints."""

    @pytest.mark.asyncio
    async def test_login_switches_convention(self, async_client: AsyncClient, session_checker):
        # Act
        response = await async_client.post(
            "/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"}
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["bypass_active"] is True
        assert data["calling_convention"] == "remote_procedure"
        assert data["heartbeat"] == "monitoring"
        assert session_checker.validated == [("s3cret", "tok-1")]

    @pytest.mark.asyncio
    async def test_rejected_login(self, async_client: AsyncClient, session_checker):
        session_checker.result = SessionCheckResult(ok=False, reason="Session superseded")

        response = await async_client.post(
            "/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"}
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "SESSION_REVOKED"

    @pytest.mark.asyncio
    async def test_privileged_routes_refused_after_revocation(
        self, async_client: AsyncClient, session_checker, seeded
    ):
        # Arrange
        session_checker.result = SessionCheckResult(ok=False, reason="Session superseded")
        await async_client.post(
            "/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"}
        )

        # Act
        response = await async_client.get("/api/v1/applications")
        session = await async_client.get("/api/v1/session")

        # Assert
        assert response.status_code == 401
        assert session.json()["requires_login"] is True
        assert session.json()["revocation_reason"] == "Session superseded"
        assert session.json()["calling_convention"] == "direct_table"

    @pytest.mark.asyncio
    async def test_logout(self, async_client: AsyncClient, session_checker):
        await async_client.post(
            "/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"}
        )

        response = await async_client.delete("/api/v1/session/bypass")

        assert response.json()["bypass_active"] is False
        assert session_checker.released == [("s3cret", "tok-1")]

    @pytest.mark.asyncio
    async def test_login_validation(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/session/bypass", json={"secret": "s3cret"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_notices(self, async_client: AsyncClient):
        await async_client.post(
            "/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"}
        )

        response = await async_client.get("/api/v1/notices", params={"limit": 1})

        assert response.json()[0]["message"] == "System admin session started"


class TestDashboardRoutes:
    """Tests for dashboard, presence and realtime relay endpoints."""

    @pytest.mark.asyncio
    async def test_refresh_dashboard(self, async_client: AsyncClient, seeded):
        response = await async_client.post("/api/v1/dashboard/refresh")

        assert response.status_code == 200
        data = response.json()
        assert data["total_users"] == 1
        assert data["pending_applications"] == 1
        assert data["top_categories"] == [{"label": "Food", "count": 1}]
        assert len(data["user_growth"]) == 7
        assert data["is_loading"] is False

    @pytest.mark.asyncio
    async def test_presence_relay(self, async_client: AsyncClient, console):
        # Arrange
        console.presence.start(console.feed)

        # Act
        relay = await async_client.post(
            "/api/v1/realtime/presence",
            json={
                "kind": "sync",
                "members": {
                    "c1": {"identity_id": "u1", "role": "buyer"},
                    "c2": {"identity_id": "u2", "role": "seller"},
                },
            },
        )
        for _ in range(10):
            await asyncio.sleep(0)
        await console.presence.stop()
        presence = await async_client.get("/api/v1/presence")

        # Assert
        assert relay.status_code == 202
        assert relay.json() == {"delivered": 1}
        assert presence.json() == {"total": 2, "buyers": 1, "sellers": 1, "admins": 0}

    @pytest.mark.asyncio
    async def test_change_relay_without_subscribers(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/realtime/changes", json={"table": "products", "event_type": "UPDATE"}
        )

        assert response.json() == {"delivered": 0}


class TestPlatformRoutes:
    """Tests for settings, products and sellers."""

    @pytest.mark.asyncio
    async def test_update_setting_and_product(self, async_client: AsyncClient, seeded):
        setting = await async_client.put(
            "/api/v1/settings/subscriptions_enabled", json={"value": True}
        )
        product = await async_client.patch("/api/v1/products/p1", json={"is_active": False})
        deleted = await async_client.delete("/api/v1/products/p1")

        assert setting.json() == {"key": "subscriptions_enabled", "value": True}
        assert product.json() == {"id": "p1", "is_active": False}
        assert deleted.status_code == 204
        assert seeded.rows(Collection.PRODUCTS) == []

    @pytest.mark.asyncio
    async def test_list_sellers_follows_convention(
        self, async_client: AsyncClient, backend, session_checker
    ):
        # Arrange
        backend.add_identity("user-1", role="buyer", full_name="Kofi Mensah")
        backend.add_identity("user-2", role="seller", full_name="Yaw Boateng")
        backend.add_identity("user-3", role="publisher_seller", full_name="Abena Owusu")

        # Act
        direct = await async_client.get("/api/v1/sellers")
        await async_client.post("/api/v1/session/bypass", json={"secret": "s3cret", "token": "tok-1"})
        via_procedure = await async_client.get("/api/v1/sellers")

        # Assert
        assert [seller["full_name"] for seller in direct.json()] == ["Abena Owusu", "Yaw Boateng"]
        assert via_procedure.json() == direct.json()
        assert [call for call in backend.calls if call[1] == "list_sellers"] == [
            ("direct_table", "list_sellers"),
            ("remote_procedure", "list_sellers"),
        ]
