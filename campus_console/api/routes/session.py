"""
Bypass session API routes.

- GET /api/v1/session - Current session state
- POST /api/v1/session/bypass - Start a bypass session
- DELETE /api/v1/session/bypass - End the bypass session
- GET /api/v1/notices - Operator notices
"""

from fastapi import APIRouter, Query, status

from campus_console.api.dependencies import ConsoleDep
from campus_console.application.dto.session_dto import (
    BypassLoginInput,
    NoticeOutput,
    SessionStatusOutput,
)
from campus_console.infrastructure.config.container import Console

router = APIRouter(tags=["Session"])


def _status(console: Console) -> SessionStatusOutput:
    context = console.context
    return SessionStatusOutput(
        bypass_active=context.current is not None and context.current.grants_bypass,
        calling_convention=console.resolver.convention_for("status").value,
        heartbeat=console.sessions.heartbeat_state.value,
        requires_login=context.requires_login,
        revocation_reason=context.revocation_reason,
    )


@router.get("/session", response_model=SessionStatusOutput, summary="Session state")
async def get_session(console: ConsoleDep) -> SessionStatusOutput:
    return _status(console)


@router.post(
    "/session/bypass",
    response_model=SessionStatusOutput,
    status_code=status.HTTP_201_CREATED,
    summary="Start bypass session",
    description="Stores the secret and token and validates them immediately.",
)
async def start_bypass_session(
    request_data: BypassLoginInput, console: ConsoleDep
) -> SessionStatusOutput:
    await console.sessions.login(request_data.secret, request_data.token)
    return _status(console)


@router.delete(
    "/session/bypass", response_model=SessionStatusOutput, summary="End bypass session"
)
async def end_bypass_session(console: ConsoleDep) -> SessionStatusOutput:
    await console.sessions.logout()
    return _status(console)


@router.get("/notices", response_model=list[NoticeOutput], summary="Operator notices")
async def list_notices(
    console: ConsoleDep, limit: int = Query(20, ge=1, le=1000)
) -> list[NoticeOutput]:
    return [NoticeOutput.from_entity(notice) for notice in console.notices.recent(limit)]
