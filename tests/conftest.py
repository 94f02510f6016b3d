"""
Pytest configuration and fixtures for the admin console tests.

This module provides:
- Environment configuration (before anything from campus_console is imported)
- An in-memory backend with gateways for both calling conventions
- Fakes for the session check and SMS provider
- A fully wired console and an HTTP client for route tests
"""

# Set environment variables BEFORE importing anything from campus_console
import os

os.environ["BACKEND_URL"] = "http://backend.test"
os.environ["BACKEND_ANON_KEY"] = "test-anon-key"
os.environ["OPERATOR_ID"] = "5b1e2a8c-3f4d-4e6a-9b7c-1d2e3f4a5b6c"
os.environ["LOG_FILE_ENABLED"] = "false"
os.environ["SMS_ENABLED"] = "false"
os.environ["SESSION_STATE_PATH"] = ".pytest-session/session.json"

import re
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from campus_console.application.exceptions import AuthorizationError
from campus_console.application.ports.outbound.backend_gateway_port import CallingConvention
from campus_console.application.ports.outbound.query import Collection, Filter, FilterOp, Order
from campus_console.application.ports.outbound.session_check_port import SessionCheckResult
from campus_console.core.config import settings
from campus_console.domain.entities.activity_log import ActivityLogEntry
from campus_console.domain.entities.identity import Identity
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.value_objects.role import SELLER_CLASS_ROLES, Role
from campus_console.infrastructure.adapters.outbound.backend.mappers import (
    ActivityLogMapper,
    IdentityMapper,
    SellerApplicationMapper,
    SellerProfileMapper,
)
from campus_console.infrastructure.adapters.outbound.realtime import InProcessRealtimeFeed
from campus_console.infrastructure.adapters.outbound.session import InMemorySessionStore
from campus_console.infrastructure.config.container import Console
from campus_console.main import create_app

OPERATOR_ID = os.environ["OPERATOR_ID"]


# ============================================================================
# In-memory backend
# ============================================================================
def _matches(row: dict[str, Any], filter_: Filter) -> bool:
    value = row.get(filter_.column)
    if filter_.op is FilterOp.EQ:
        return value == filter_.value
    if filter_.op is FilterOp.NEQ:
        return value != filter_.value
    if filter_.op is FilterOp.GTE:
        return value is not None and str(value) >= str(filter_.value)
    if filter_.op is FilterOp.LTE:
        return value is not None and str(value) <= str(filter_.value)
    if filter_.op is FilterOp.IN:
        return value in filter_.value
    if filter_.op is FilterOp.ILIKE:
        pattern = re.escape(str(filter_.value)).replace(r"\*", ".*").replace("%", ".*")
        return value is not None and re.fullmatch(pattern, str(value), re.IGNORECASE) is not None
    if filter_.op is FilterOp.IS:
        return value is filter_.value
    raise ValueError(filter_.op)


class InMemoryBackend:
    """
    Rows per collection plus a call journal.

    Implements StatsReaderPort directly. ``fail(operation, exc)`` makes the
    next calls of a gateway operation (or a stats collection) raise.
    """

    def __init__(self) -> None:
        self.tables: dict[Collection, list[dict[str, Any]]] = {c: [] for c in Collection}
        self.failures: dict[str, Exception] = {}
        self.calls: list[tuple[str, str]] = []

    def fail(self, operation: str, exc: Exception) -> None:
        self.failures[operation] = exc

    def check(self, convention: str, operation: str) -> None:
        self.calls.append((convention, operation))
        if operation in self.failures:
            raise self.failures[operation]

    def rows(self, collection: Collection, **equals: Any) -> list[dict[str, Any]]:
        return [
            row
            for row in self.tables[collection]
            if all(row.get(column) == value for column, value in equals.items())
        ]

    def add_identity(self, identity_id: str, role: str = "buyer", full_name: str = "",
                     **extra: Any) -> dict[str, Any]:
        row = {"id": identity_id, "role": role, "full_name": full_name, **extra}
        self.tables[Collection.IDENTITIES].append(row)
        return row

    def add_application(self, application_id: str, user_id: str, business_name: str,
                        status: str = "pending", **extra: Any) -> dict[str, Any]:
        row = {
            "id": application_id,
            "user_id": user_id,
            "business_name": business_name,
            "status": status,
            "created_at": "2026-10-17T09:00:00+00:00",
            "updated_at": "2026-10-17T09:00:00+00:00",
            **extra,
        }
        self.tables[Collection.SELLER_APPLICATIONS].append(row)
        return row

    # StatsReaderPort
    async def count(self, collection: Collection, filters: Optional[list[Filter]] = None) -> int:
        return len(await self.select(collection, filters=filters))

    async def select(
        self,
        collection: Collection,
        columns: str = "*",
        filters: Optional[list[Filter]] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        if f"stats:{collection.value}" in self.failures:
            raise self.failures[f"stats:{collection.value}"]
        rows = [
            dict(row)
            for row in self.tables[collection]
            if all(_matches(row, f) for f in filters or [])
        ]
        return rows[:limit] if limit is not None else rows


class InMemoryGateway:
    """BackendGatewayPort over InMemoryBackend, for either convention."""

    def __init__(self, backend: InMemoryBackend, convention: CallingConvention,
                 secret: Optional[str] = None):
        self.backend = backend
        self.convention = convention
        self.secret = secret

    def _check(self, operation: str) -> None:
        self.backend.check(self.convention.value, operation)

    def _single(self, collection: Collection, **equals: Any) -> dict[str, Any]:
        rows = self.backend.rows(collection, **equals)
        if not rows:
            raise AuthorizationError(
                f"Permission denied on {collection.value}",
                convention=self.convention.value,
                operation=collection.value,
            )
        return rows[0]

    async def get_identity(self, identity_id: str) -> Optional[Identity]:
        self._check("get_identity")
        rows = self.backend.rows(Collection.IDENTITIES, id=identity_id)
        return IdentityMapper.to_entity(rows[0]) if rows else None

    async def list_applications(self, status: Optional[ApplicationStatus] = None,
                                limit: int = 100) -> list[SellerApplication]:
        self._check("list_applications")
        rows = self.backend.tables[Collection.SELLER_APPLICATIONS]
        if status is not None:
            rows = [row for row in rows if row["status"] == status.value]
        return [SellerApplicationMapper.to_entity(row) for row in rows[:limit]]

    async def update_application_status(self, application_id: str, status: ApplicationStatus,
                                        reviewed_at: datetime, reviewed_by: Optional[str] = None,
                                        rejection_reason: Optional[str] = None) -> None:
        self._check("update_application_status")
        row = self._single(Collection.SELLER_APPLICATIONS, id=application_id)
        row.update(
            SellerApplicationMapper.to_status_update(
                status, reviewed_at, reviewed_by, rejection_reason
            )
        )

    async def update_identity_role(self, identity_id: str, role: Role) -> None:
        self._check("update_identity_role")
        self._single(Collection.IDENTITIES, id=identity_id)["role"] = role.value

    async def upsert_seller_profile(self, profile: SellerProfile) -> None:
        self._check("upsert_seller_profile")
        table = self.backend.tables[Collection.SELLER_PROFILES]
        table[:] = [row for row in table if row["user_id"] != profile.user_id]
        table.append(SellerProfileMapper.to_row(profile))

    async def append_activity_log(self, entry: ActivityLogEntry) -> None:
        self._check("append_activity_log")
        self.backend.tables[Collection.ACTIVITY_LOGS].append(ActivityLogMapper.to_row(entry))

    async def set_platform_setting(self, key: str, value: Any) -> None:
        self._check("set_platform_setting")
        table = self.backend.tables[Collection.PLATFORM_SETTINGS]
        table[:] = [row for row in table if row["key"] != key]
        table.append({"key": key, "value": value})

    async def list_platform_settings(self) -> dict[str, Any]:
        self._check("list_platform_settings")
        return {row["key"]: row["value"] for row in self.backend.tables[Collection.PLATFORM_SETTINGS]}

    async def set_product_active(self, product_id: str, is_active: bool) -> None:
        self._check("set_product_active")
        self._single(Collection.PRODUCTS, id=product_id)["is_active"] = is_active

    async def delete_product(self, product_id: str) -> None:
        self._check("delete_product")
        row = self._single(Collection.PRODUCTS, id=product_id)
        self.backend.tables[Collection.PRODUCTS].remove(row)

    async def list_sellers(self) -> list[Identity]:
        self._check("list_sellers")
        roles = {role.value for role in SELLER_CLASS_ROLES}
        return [
            IdentityMapper.to_entity(row)
            for row in self.backend.tables[Collection.IDENTITIES]
            if row.get("role") in roles
        ]


class FakeSessionChecker:
    """Session check answering with a configurable result."""

    def __init__(self, result: Optional[SessionCheckResult] = None):
        self.result = result or SessionCheckResult(ok=True)
        self.error: Optional[Exception] = None
        self.validated: list[tuple[str, str]] = []
        self.released: list[tuple[str, str]] = []

    async def validate_session(self, secret: str, token: str) -> SessionCheckResult:
        self.validated.append((secret, token))
        if self.error is not None:
            raise self.error
        return self.result

    async def release_session(self, secret: str, token: str) -> None:
        self.released.append((secret, token))


class FakeSmsSender:
    """Records SMS instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.error: Optional[Exception] = None
        self.balance = 120.0

    async def send(self, recipients: list[str], message: str, template: Optional[str] = None,
                   variables: Optional[dict[str, str]] = None) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append(
            {"recipients": recipients, "message": message, "template": template,
             "variables": variables}
        )

    async def get_balance(self) -> float:
        return self.balance


# ============================================================================
# Fixtures
# ============================================================================
@pytest.fixture
def fixed_now():
    """Fixed current time used by clocks in tests."""
    return datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def backend():
    """Empty in-memory backend."""
    return InMemoryBackend()


@pytest.fixture
def direct_gateway(backend):
    return InMemoryGateway(backend, CallingConvention.DIRECT_TABLE)


@pytest.fixture
def procedure_gateway_factory(backend):
    """Factory building remote-procedure gateways that remember their secret."""
    return lambda secret: InMemoryGateway(backend, CallingConvention.REMOTE_PROCEDURE, secret)


@pytest.fixture
def session_checker():
    return FakeSessionChecker()


@pytest.fixture
def sms_sender():
    return FakeSmsSender()


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def console(backend, direct_gateway, procedure_gateway_factory, session_checker,
            session_store, sms_sender):
    """Console wired entirely to in-memory fakes."""
    return Console(
        settings,
        direct_gateway=direct_gateway,
        procedure_gateway_factory=procedure_gateway_factory,
        session_checker=session_checker,
        session_store=session_store,
        stats_reader=backend,
        sms_sender=sms_sender,
        feed=InProcessRealtimeFeed(),
    )


@pytest_asyncio.fixture
async def async_client(console) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the application, bound to the in-memory console."""
    app = create_app(console)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client
    await console.stop()
