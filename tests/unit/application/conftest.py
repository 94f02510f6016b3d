"""Fixtures shared by application layer tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from campus_console.application.services import (
    ApplicationBoard,
    CredentialResolver,
    OperatorNotices,
    SessionContext,
)
from campus_console.domain.value_objects import BypassSession
from campus_console.infrastructure.adapters.outbound.session import InMemorySessionStore


@pytest.fixture
def context():
    """Session context without a bypass session."""
    return SessionContext(InMemorySessionStore())


@pytest.fixture
def bypass_context():
    """Session context holding a monitorable bypass session."""
    return SessionContext(InMemorySessionStore(BypassSession.start("s3cret", "tok-1")))


@pytest.fixture
def resolver(context, direct_gateway, procedure_gateway_factory):
    return CredentialResolver(context, direct_gateway, procedure_gateway_factory)


@pytest.fixture
def notices():
    return OperatorNotices()


@pytest.fixture
def board():
    return ApplicationBoard()


@pytest.fixture
def mock_stats():
    """Stats reconciler mock recording silent refreshes."""
    stats = Mock()
    stats.refresh = AsyncMock()
    return stats
