"""Unit tests for Role value object."""

import pytest

from campus_console.domain.exceptions import InvalidRoleError
from campus_console.domain.value_objects.role import (
    ADMIN_CLASS_ROLES,
    PUBLISHING_ROLES,
    SELLER_CLASS_ROLES,
    Role,
)


class TestRoleParse:
    """Test parsing raw role strings."""

    def test_parse_known_role(self):
        assert Role.parse("publisher_seller") is Role.PUBLISHER_SELLER

    def test_parse_normalizes_case_and_whitespace(self):
        assert Role.parse("  Super_Admin ") is Role.SUPER_ADMIN

    def test_parse_returns_role_unchanged(self):
        assert Role.parse(Role.ADMIN) is Role.ADMIN

    @pytest.mark.parametrize("value", ["", "moderator", None])
    def test_parse_unknown_raises_error(self, value):
        """Test unknown values raise InvalidRoleError."""
        with pytest.raises(InvalidRoleError) as exc_info:
            Role.parse(value)
        assert exc_info.value.code == "INVALID_ROLE"


class TestRoleCapabilities:
    """Test capability predicates."""

    def test_role_classes(self):
        assert PUBLISHING_ROLES == {Role.NEWS_PUBLISHER, Role.PUBLISHER_SELLER}
        assert SELLER_CLASS_ROLES == {Role.SELLER, Role.PUBLISHER_SELLER}
        assert ADMIN_CLASS_ROLES == {Role.ADMIN, Role.SUPER_ADMIN}

    def test_publisher_seller_can_publish_and_sell(self):
        assert Role.PUBLISHER_SELLER.can_publish is True
        assert Role.PUBLISHER_SELLER.can_sell is True
        assert Role.PUBLISHER_SELLER.is_administrative is False

    def test_buyer_has_no_capabilities(self):
        assert Role.BUYER.can_publish is False
        assert Role.BUYER.can_sell is False
        assert Role.BUYER.is_administrative is False
