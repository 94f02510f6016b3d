"""
Dashboard and presence API routes.

- GET /api/v1/dashboard - Current snapshot
- POST /api/v1/dashboard/refresh - Rebuild the snapshot now
- GET /api/v1/presence - Live connection counts
"""

from fastapi import APIRouter

from campus_console.api.dependencies import ConsoleDep, PrivilegedConsole
from campus_console.application.dto.dashboard_dto import DashboardOutput, PresenceOutput

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_model=DashboardOutput, summary="Dashboard snapshot")
async def get_dashboard(console: PrivilegedConsole) -> DashboardOutput:
    stats = console.stats
    return DashboardOutput.from_entity(stats.snapshot, is_loading=stats.is_loading)


@router.post("/dashboard/refresh", response_model=DashboardOutput, summary="Refresh dashboard")
async def refresh_dashboard(console: PrivilegedConsole) -> DashboardOutput:
    snapshot = await console.stats.refresh()
    return DashboardOutput.from_entity(snapshot, is_loading=console.stats.is_loading)


@router.get("/presence", response_model=PresenceOutput, summary="Live presence counts")
async def get_presence(console: ConsoleDep) -> PresenceOutput:
    return PresenceOutput.from_entity(console.presence.counts)
