"""Reject seller application use case."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from campus_console.application.dto.application_dto import ApplicationOutput
from campus_console.application.exceptions import (
    ConflictError,
    NotFoundError,
    WorkflowStepError,
)
from campus_console.application.services.application_board import ApplicationBoard
from campus_console.application.services.credential_resolver import CredentialResolver
from campus_console.application.services.operator_notices import OperatorNotices
from campus_console.application.services.stats_reconciler import StatsReconciler
from campus_console.application.use_cases.applications.workflow import (
    OptimisticStatusChange,
    StepResult,
    WorkflowEngine,
    WorkflowStep,
)
from campus_console.domain.entities.activity_log import APPLICATION_REJECTED, ActivityLogEntry
from campus_console.domain.entities.seller_application import ApplicationStatus
from campus_console.domain.value_objects.identity_ref import reviewer_reference

logger = logging.getLogger(__name__)


class RejectApplicationUseCase:
    """Use case for rejecting a pending seller application."""

    def __init__(
        self,
        board: ApplicationBoard,
        resolver: CredentialResolver,
        notices: OperatorNotices,
        stats: StatsReconciler,
        operator_id: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.board = board
        self.resolver = resolver
        self.notices = notices
        self.stats = stats
        self.operator_id = operator_id
        self.clock = clock
        self.engine = WorkflowEngine()

    async def execute(
        self, application_id: str, reason: Optional[str] = None
    ) -> ApplicationOutput:
        """
        Reject an application.

        Args:
            application_id: Application to reject
            reason: Optional rejection reason

        Returns:
            The rejected application

        Raises:
            NotFoundError: If the application is not on the board
            ConflictError: If the application is no longer pending
            WorkflowStepError: If persisting the status fails
        """
        application = self.board.get(application_id)
        if application is None:
            raise NotFoundError(
                f"Application {application_id} not found",
                resource_type="SellerApplication",
                resource_id=application_id,
            )
        if not application.is_pending:
            raise ConflictError(
                f"Application is already {application.status.value}",
                operation="reject",
                current_state=application.status.value,
            )

        reason = reason.strip() if reason and reason.strip() else None
        optimistic = OptimisticStatusChange(
            application=application,
            target=ApplicationStatus.REJECTED,
            reviewed_at=self.clock(),
            reviewed_by=reviewer_reference(self.operator_id),
            rejection_reason=reason,
        )

        async def persist_status(results: dict[str, Any]) -> StepResult:
            gateway = self.resolver.gateway_for("update_application_status")
            await gateway.update_application_status(
                application.id,
                ApplicationStatus.REJECTED,
                reviewed_at=optimistic.reviewed_at,
                reviewed_by=optimistic.reviewed_by,
                rejection_reason=reason,
            )
            return StepResult()

        async def log_activity(results: dict[str, Any]) -> StepResult:
            entry = ActivityLogEntry(
                actor_id=optimistic.reviewed_by,
                action_type=APPLICATION_REJECTED,
                details={
                    "application_id": application.id,
                    "user_id": application.user_id,
                    "business_name": application.business_name,
                    "reason": reason,
                },
                created_at=self.clock(),
            )
            gateway = self.resolver.gateway_for("append_activity_log")
            await gateway.append_activity_log(entry)
            return StepResult(value=entry)

        try:
            await self.engine.run(
                "reject_application",
                optimistic,
                steps=[WorkflowStep("persist_status", persist_status)],
                follow_ups=[WorkflowStep("log_activity", log_activity)],
            )
        except WorkflowStepError as exc:
            self.notices.error(f"Failed to reject: {exc.message}")
            raise

        logger.info(f"Rejected {application!r}")
        self.notices.success("Application rejected")
        await self.stats.refresh(silent=True)
        return ApplicationOutput.from_entity(application)
