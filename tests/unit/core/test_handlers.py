"""
Unit tests for exception handlers.

Tests cover:
- Status mapping for application, domain and workflow errors
- ApplicationError handler response format
- General exception handler
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi import Request

from campus_console.application.exceptions import (
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    SessionRevokedError,
    ValidationError,
    WorkflowStepError,
)
from campus_console.core.handlers import (
    application_exception_handler,
    domain_exception_handler,
    general_exception_handler,
    status_code_for,
)
from campus_console.domain.exceptions import InvalidApplicationTransitionError, InvalidRoleError


@pytest.fixture
def mock_request() -> MagicMock:
    """Create a mock request with request_id in state."""
    request = MagicMock(spec=Request)
    request.state.request_id = "test-request-123"
    return request


class TestStatusCodeFor:
    """Tests for exception to status mapping."""

    @pytest.mark.parametrize(
        "exc,expected",
        [
            (SessionRevokedError("Expired"), 401),
            (AuthorizationError("Invalid secret key"), 403),
            (NotFoundError(), 404),
            (ConflictError(), 409),
            (ValidationError(), 422),
            (ExternalServiceError(), 502),
            (InvalidApplicationTransitionError("approved", "approved"), 409),
            (InvalidRoleError("ghost"), 422),
        ],
    )
    def test_mapping(self, exc, expected) -> None:
        assert status_code_for(exc) == expected

    def test_workflow_error_uses_cause_status(self) -> None:
        exc = WorkflowStepError("approve_application", "persist_role", AuthorizationError("no"))
        assert status_code_for(exc) == 403

    def test_workflow_error_with_unexpected_cause(self) -> None:
        exc = WorkflowStepError("approve_application", "persist_role", RuntimeError("boom"))
        assert status_code_for(exc) == 502


class TestApplicationExceptionHandler:
    """Tests for application_exception_handler."""

    @pytest.mark.asyncio
    async def test_returns_correct_json_structure(self, mock_request: MagicMock) -> None:
        """Handler keeps the backend's message verbatim."""
        exc = AuthorizationError(
            "permission denied for table profiles", convention="direct_table", backend_code="42501"
        )

        response = await application_exception_handler(mock_request, exc)
        body = json.loads(response.body)

        assert response.status_code == 403
        assert body["error"]["code"] == "AUTHORIZATION_FAILED"
        assert body["error"]["message"] == "permission denied for table profiles"
        assert body["error"]["details"] == {"convention": "direct_table", "backend_code": "42501"}
        assert body["meta"]["request_id"] == "test-request-123"

    @pytest.mark.asyncio
    async def test_domain_exception(self, mock_request: MagicMock) -> None:
        response = await domain_exception_handler(mock_request, InvalidRoleError("ghost"))
        body = json.loads(response.body)

        assert response.status_code == 422
        assert body["error"]["code"] == "INVALID_ROLE"


class TestGeneralExceptionHandler:
    """Tests for general_exception_handler."""

    @pytest.mark.asyncio
    async def test_returns_500(self, mock_request: MagicMock) -> None:
        response = await general_exception_handler(mock_request, RuntimeError("secret detail"))
        body = json.loads(response.body)

        assert response.status_code == 500
        assert body["error"]["code"] == "INTERNAL_ERROR"
