"""Unit tests for the backend session check."""

import pytest

from campus_console.infrastructure.adapters.outbound.backend import BackendSessionChecker
from campus_console.infrastructure.adapters.outbound.backend.session_checker import (
    MALFORMED_RESPONSE_REASON,
    parse_session_check,
)


class TestParseSessionCheck:
    """Test interpretation of the check result."""

    def test_ok(self):
        assert parse_session_check({"ok": True}).ok is True

    def test_ok_in_list(self):
        assert parse_session_check([{"ok": True}]).ok is True

    def test_rejected_with_reason(self):
        result = parse_session_check({"ok": False, "reason": "Session superseded"})

        assert result.ok is False
        assert result.reason == "Session superseded"

    @pytest.mark.parametrize("data", [None, [], "ok", {"ok": "true"}, {"valid": True}])
    def test_malformed_results_fail(self, data):
        result = parse_session_check(data)

        assert result.ok is False
        assert result.reason == MALFORMED_RESPONSE_REASON


class TestBackendSessionChecker:
    """Test session procedure calls."""

    @pytest.mark.asyncio
    async def test_validate_session(self, rest_client, handler):
        handler.reply(json_body={"ok": True})

        result = await BackendSessionChecker(rest_client).validate_session("s3cret", "tok")

        assert result.ok is True
        assert handler.last.url.path == "/rest/v1/rpc/sys_validate_admin_session"
        assert handler.last_json() == {"secret_key": "s3cret", "s_token": "tok"}

    @pytest.mark.asyncio
    async def test_release_session(self, rest_client, handler):
        handler.reply(204)

        await BackendSessionChecker(rest_client).release_session("s3cret", "tok")

        assert handler.last.url.path == "/rest/v1/rpc/sys_release_admin_session"
