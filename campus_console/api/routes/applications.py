"""
Seller application API routes.

- GET /api/v1/applications - List applications, reloading them by default
- POST /api/v1/applications/{application_id}/approve - Approve an application
- POST /api/v1/applications/{application_id}/reject - Reject an application
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Query

from campus_console.api.dependencies import PrivilegedConsole
from campus_console.application.dto.application_dto import (
    ApplicationListOutput,
    ApplicationOutput,
    RejectApplicationInput,
)
from campus_console.domain.entities.seller_application import ApplicationStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get(
    "",
    response_model=ApplicationListOutput,
    summary="List seller applications",
    description="Returns applications newest first, with the number of applications per "
                "status. With reload=false the current board is returned as is.",
)
async def list_applications(
    console: PrivilegedConsole,
    status: Optional[ApplicationStatus] = Query(None, description="Filter by status"),
    limit: int = Query(100, ge=1, le=1000),
    reload: bool = Query(True, description="Reload applications from the backend first"),
) -> ApplicationListOutput:
    return await console.list_applications.execute(status=status, limit=limit, reload=reload)


@router.post(
    "/{application_id}/approve",
    response_model=ApplicationOutput,
    summary="Approve a seller application",
)
async def approve_application(application_id: str, console: PrivilegedConsole) -> ApplicationOutput:
    """
    Approve a pending application.

    Raises:
        404: If the application is not loaded
        409: If the application is not pending
        403: If the backend refuses one of the steps
    """
    return await console.approve_application.execute(application_id)


@router.post(
    "/{application_id}/reject",
    response_model=ApplicationOutput,
    summary="Reject a seller application",
)
async def reject_application(
    application_id: str,
    console: PrivilegedConsole,
    request_data: Optional[RejectApplicationInput] = Body(None),
) -> ApplicationOutput:
    reason = request_data.reason if request_data else None
    return await console.reject_application.execute(application_id, reason=reason)
