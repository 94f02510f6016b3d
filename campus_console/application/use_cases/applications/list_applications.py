"""List seller applications use case."""

from typing import Optional

from campus_console.application.dto.application_dto import (
    ApplicationListOutput,
    ApplicationOutput,
)
from campus_console.application.services.application_board import ApplicationBoard
from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.domain.entities.seller_application import ApplicationStatus


class ListApplicationsUseCase:
    """Use case for loading applications into the board and listing them."""

    def __init__(self, board: ApplicationBoard, resolver: CredentialResolver):
        self.board = board
        self.resolver = resolver

    async def execute(
        self,
        status: Optional[ApplicationStatus] = None,
        limit: int = 100,
        reload: bool = True,
    ) -> ApplicationListOutput:
        """
        List the board, reloading it from the backend first unless told not to.

        Without a reload the board shows what workflows left in it, including
        a status reverted after a failed step.

        Args:
            status: Only return applications in this status
            limit: Maximum number of applications to load
            reload: Replace the board with the backend's applications first

        Returns:
            Applications, newest first, and per-status counts of the board
        """
        if reload:
            gateway = self.resolver.gateway_for("list_applications")
            applications = await gateway.list_applications(limit=limit)
            self.board.replace_all(applications)

        return ApplicationListOutput(
            items=[ApplicationOutput.from_entity(a) for a in self.board.list(status)],
            counts=self.board.counts(),
        )
