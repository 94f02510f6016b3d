"""DTOs for events relayed from the realtime feed."""

from typing import Literal, Union

from pydantic import BaseModel, Field

from campus_console.application.ports.outbound.query import Collection
from campus_console.domain.entities.presence import (
    JoinEvent,
    PresenceMember,
    SyncEvent,
)


class PresenceMemberInput(BaseModel):
    """A connected identity as reported by the feed."""

    identity_id: str = Field(..., min_length=1)
    role: str = Field(..., description="Role name; unknown roles only count towards the total")
    display_name: str = ""

    def to_entity(self) -> PresenceMember:
        return PresenceMember(
            identity_id=self.identity_id, role=self.role, display_name=self.display_name
        )


class SyncEventInput(BaseModel):
    """Full roster, keyed by connection."""

    kind: Literal["sync"]
    members: dict[str, PresenceMemberInput] = Field(default_factory=dict)

    def to_entity(self) -> SyncEvent:
        return SyncEvent(members={key: m.to_entity() for key, m in self.members.items()})


class JoinEventInput(BaseModel):
    """One newly connected identity."""

    kind: Literal["join"]
    key: str
    member: PresenceMemberInput

    def to_entity(self) -> JoinEvent:
        return JoinEvent(key=self.key, member=self.member.to_entity())


PresenceEventInput = Union[SyncEventInput, JoinEventInput]


class ChangeEventInput(BaseModel):
    """A change in a backend collection."""

    table: Collection = Field(..., description="Table that changed")
    event_type: Literal["INSERT", "UPDATE", "DELETE", "*"] = "*"
