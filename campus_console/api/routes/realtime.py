"""
Inbound relay for the backend's streaming feed.

- POST /api/v1/realtime/presence - Presence sync or join event
- POST /api/v1/realtime/changes - Table change notification
"""

from fastapi import APIRouter, status

from campus_console.api.dependencies import ConsoleDep
from campus_console.application.dto.realtime_dto import ChangeEventInput, PresenceEventInput
from campus_console.application.ports.outbound.realtime_feed_port import ChangeEvent

router = APIRouter(prefix="/realtime", tags=["Realtime"])


@router.post("/presence", status_code=status.HTTP_202_ACCEPTED, summary="Relay presence event")
async def relay_presence(
    event: PresenceEventInput, console: ConsoleDep
) -> dict[str, int]:
    return {"delivered": console.feed.publish_presence(event.to_entity())}


@router.post("/changes", status_code=status.HTTP_202_ACCEPTED, summary="Relay change event")
async def relay_change(event: ChangeEventInput, console: ConsoleDep) -> dict[str, int]:
    delivered = console.feed.publish_change(
        ChangeEvent(collection=event.table, event_type=event.event_type)
    )
    return {"delivered": delivered}
