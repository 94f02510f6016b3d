"""Role value object."""

from enum import Enum

from campus_console.domain.exceptions import InvalidRoleError


class Role(str, Enum):
    """Capability set a marketplace identity can hold."""

    BUYER = "buyer"
    SELLER = "seller"
    NEWS_PUBLISHER = "news_publisher"
    PUBLISHER_SELLER = "publisher_seller"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        """
        Convert a raw role string into a Role.

        Args:
            value: Role name as stored by the backend

        Returns:
            Matching Role

        Raises:
            InvalidRoleError: If the value is not a known role
        """
        if isinstance(value, Role):
            return value
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise InvalidRoleError(str(value)) from None

    @property
    def can_publish(self) -> bool:
        """Whether the role carries news-publishing capability."""
        return self in PUBLISHING_ROLES

    @property
    def can_sell(self) -> bool:
        """Whether the role carries selling capability."""
        return self in SELLER_CLASS_ROLES

    @property
    def is_administrative(self) -> bool:
        """Whether the role is an elevated administrative role."""
        return self in ADMIN_CLASS_ROLES


PUBLISHING_ROLES = frozenset({Role.NEWS_PUBLISHER, Role.PUBLISHER_SELLER})
SELLER_CLASS_ROLES = frozenset({Role.SELLER, Role.PUBLISHER_SELLER})
ADMIN_CLASS_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})
