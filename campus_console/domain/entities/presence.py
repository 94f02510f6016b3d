"""Presence domain entities."""

from dataclasses import dataclass, field
from typing import Literal, Union

from campus_console.domain.exceptions import InvalidRoleError
from campus_console.domain.value_objects.role import (
    ADMIN_CLASS_ROLES,
    SELLER_CLASS_ROLES,
    Role,
)


@dataclass(frozen=True)
class PresenceMember:
    """Last-known snapshot of a connected identity."""

    identity_id: str
    role: str
    display_name: str = ""


@dataclass(frozen=True)
class SyncEvent:
    """Authoritative roster of every connected identity, keyed by connection."""

    members: dict[str, PresenceMember] = field(default_factory=dict)
    kind: Literal["sync"] = "sync"


@dataclass(frozen=True)
class JoinEvent:
    """Notification that one identity connected. Informational only."""

    key: str
    member: PresenceMember
    kind: Literal["join"] = "join"


MembershipEvent = Union[SyncEvent, JoinEvent]


@dataclass(frozen=True)
class PresenceCounts:
    """Live connection counts bucketed by role class."""

    total: int = 0
    buyers: int = 0
    sellers: int = 0
    admins: int = 0

    @classmethod
    def from_members(cls, members: dict[str, PresenceMember]) -> "PresenceCounts":
        """
        Count a roster by role class.

        Sellers include publisher-sellers and admins include super admins.
        Identities in any other role only count towards the total.
        """
        buyers = sellers = admins = 0
        for member in members.values():
            try:
                role = Role.parse(member.role)
            except InvalidRoleError:
                continue
            if role is Role.BUYER:
                buyers += 1
            elif role in SELLER_CLASS_ROLES:
                sellers += 1
            elif role in ADMIN_CLASS_ROLES:
                admins += 1
        return cls(total=len(members), buyers=buyers, sellers=sellers, admins=admins)
