"""Bypass session and notice DTOs."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from campus_console.application.services.operator_notices import Notice


class BypassLoginInput(BaseModel):
    """Input DTO for starting a bypass session."""

    secret: str = Field(..., min_length=1, description="Shared bypass secret")
    token: str = Field(..., min_length=1, description="Session token issued by the backend")

    model_config = {"frozen": True}


class SessionStatusOutput(BaseModel):
    """Output DTO for the current session state."""

    bypass_active: bool = Field(..., description="A bypass session is held")
    calling_convention: str = Field(..., description="Convention the next call will use")
    heartbeat: str = Field(..., description="idle, monitoring or revoked")
    requires_login: bool = Field(..., description="The session was revoked")
    revocation_reason: Optional[str] = Field(None, description="Why the session was revoked")

    model_config = {"frozen": True}


class NoticeOutput(BaseModel):
    """Output DTO for an operator notice."""

    level: str
    message: str
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, notice: Notice) -> "NoticeOutput":
        return cls(level=notice.level.value, message=notice.message, created_at=notice.created_at)
