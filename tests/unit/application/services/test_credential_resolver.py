"""Unit tests for credential resolution."""

import pytest

from campus_console.application.ports.outbound.backend_gateway_port import CallingConvention
from campus_console.application.services import CredentialResolver, resolve_calling_convention
from campus_console.domain.value_objects import BypassSession


class TestResolveCallingConvention:
    """Test the pure convention decision."""

    def test_no_session_uses_direct_table(self):
        assert resolve_calling_convention(None) is CallingConvention.DIRECT_TABLE

    def test_bypass_with_secret_uses_remote_procedure(self):
        session = BypassSession(enabled=True, secret="s3cret")
        assert resolve_calling_convention(session) is CallingConvention.REMOTE_PROCEDURE

    @pytest.mark.parametrize(
        "session",
        [
            BypassSession(enabled=False, secret="s3cret", token="tok"),
            BypassSession(enabled=True, secret=""),
        ],
    )
    def test_incomplete_bypass_uses_direct_table(self, session):
        assert resolve_calling_convention(session) is CallingConvention.DIRECT_TABLE


class TestCredentialResolver:
    """Test gateway selection per action."""

    def test_direct_gateway_without_session(self, resolver, direct_gateway):
        assert resolver.gateway_for("get_identity") is direct_gateway
        assert resolver.convention_for("get_identity") is CallingConvention.DIRECT_TABLE

    def test_procedure_gateway_gets_session_secret(
        self, bypass_context, direct_gateway, procedure_gateway_factory
    ):
        # Arrange
        resolver = CredentialResolver(bypass_context, direct_gateway, procedure_gateway_factory)

        # Act
        gateway = resolver.gateway_for("update_identity_role")

        # Assert
        assert gateway.convention is CallingConvention.REMOTE_PROCEDURE
        assert gateway.secret == "s3cret"

    def test_follows_session_changes(self, context, resolver):
        """Test resolution is made per call from the session in force."""
        context.begin(BypassSession.start("s3cret", "tok"))
        assert resolver.convention_for("x") is CallingConvention.REMOTE_PROCEDURE

        context.end()
        assert resolver.convention_for("x") is CallingConvention.DIRECT_TABLE
