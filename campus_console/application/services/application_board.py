"""In-memory view of seller applications."""

import logging
from typing import Iterable, Optional

from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)

logger = logging.getLogger(__name__)


class ApplicationBoard:
    """
    Applications currently shown to the operator.

    Holds the entities that workflows mutate optimistically, so what the
    operator sees changes before the backend has confirmed anything.
    Reloading replaces the whole view.
    """

    def __init__(self) -> None:
        self._applications: dict[str, SellerApplication] = {}

    def replace_all(self, applications: Iterable[SellerApplication]) -> None:
        self._applications = {application.id: application for application in applications}
        logger.debug(f"Application board reloaded with {len(self._applications)} entries")

    def put(self, application: SellerApplication) -> None:
        self._applications[application.id] = application

    def get(self, application_id: str) -> Optional[SellerApplication]:
        return self._applications.get(application_id)

    def list(self, status: Optional[ApplicationStatus] = None) -> list[SellerApplication]:
        """Return applications, newest first, optionally filtered by status."""
        applications = [
            application
            for application in self._applications.values()
            if status is None or application.status is status
        ]
        return sorted(
            applications,
            key=lambda application: application.created_at.timestamp() if application.created_at else 0,
            reverse=True,
        )

    def counts(self) -> dict[str, int]:
        """Number of applications per status."""
        counts = {status.value: 0 for status in ApplicationStatus}
        for application in self._applications.values():
            counts[application.status.value] += 1
        return counts

    def __len__(self) -> int:
        return len(self._applications)
