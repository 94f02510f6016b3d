"""Approve seller application use case."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from campus_console.application.dto.application_dto import ApplicationOutput
from campus_console.application.exceptions import (
    ConflictError,
    NotFoundError,
    WorkflowStepError,
)
from campus_console.application.ports.outbound.sms_sender_port import SmsSenderPort
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
from campus_console.domain.entities.activity_log import APPLICATION_APPROVED, ActivityLogEntry
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)
from campus_console.domain.entities.seller_profile import SellerProfile
from campus_console.domain.services.role_merge_policy import merge_seller_role
from campus_console.domain.value_objects.identity_ref import reviewer_reference

logger = logging.getLogger(__name__)

APPROVAL_SMS_TEMPLATE = "seller_application_approved"
APPROVAL_SMS_MESSAGE = (
    "Hi <%first_name%>, congratulations! Your seller application for "
    '"<%business_name%>" on {platform} has been APPROVED. You can now log in '
    "and start listing your products. Happy selling!"
)


class ApproveApplicationUseCase:
    """
    Use case for approving a pending seller application.

    Blocking steps, in order: persist the status, read the applicant, merge
    the seller role into the applicant's role, persist the role, provision
    the seller profile. Then, best-effort: activity log, applicant SMS.
    """

    def __init__(
        self,
        board: ApplicationBoard,
        resolver: CredentialResolver,
        notices: OperatorNotices,
        stats: StatsReconciler,
        sms_sender: Optional[SmsSenderPort] = None,
        operator_id: Optional[str] = None,
        platform_name: str = "Campus Marketplace",
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        """
        Initialize use case.

        Args:
            board: In-memory application view
            resolver: Picks the gateway for every backend call
            notices: Operator notices
            stats: Dashboard statistics, refreshed silently afterwards
            sms_sender: SMS provider for the applicant notification
            operator_id: Identity id of the operator
            platform_name: Name used in the applicant notification
            clock: Source of the review timestamp
        """
        self.board = board
        self.resolver = resolver
        self.notices = notices
        self.stats = stats
        self.sms_sender = sms_sender
        self.operator_id = operator_id
        self.platform_name = platform_name
        self.clock = clock
        self.engine = WorkflowEngine()

    async def execute(self, application_id: str) -> ApplicationOutput:
        """
        Approve an application.

        Args:
            application_id: Application to approve

        Returns:
            The approved application

        Raises:
            NotFoundError: If the application is not on the board
            ConflictError: If the application is no longer pending
            WorkflowStepError: If a blocking step fails; the application is
                back to pending when this is raised
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
                operation="approve",
                current_state=application.status.value,
            )

        optimistic = OptimisticStatusChange(
            application=application,
            target=ApplicationStatus.APPROVED,
            reviewed_at=self.clock(),
            reviewed_by=reviewer_reference(self.operator_id),
        )

        try:
            await self.engine.run(
                "approve_application",
                optimistic,
                steps=self._blocking_steps(application, optimistic),
                follow_ups=self._follow_ups(application),
            )
        except WorkflowStepError as exc:
            self.notices.error(f"Failed to approve: {exc.message}")
            raise

        logger.info(f"Approved {application!r}")
        self.notices.success("Application approved successfully!")
        await self.stats.refresh(silent=True)
        return ApplicationOutput.from_entity(application)

    def _blocking_steps(
        self, application: SellerApplication, optimistic: OptimisticStatusChange
    ) -> list[WorkflowStep]:
        async def persist_status(results: dict[str, Any]) -> StepResult:
            gateway = self.resolver.gateway_for("update_application_status")
            await gateway.update_application_status(
                application.id,
                ApplicationStatus.APPROVED,
                reviewed_at=optimistic.reviewed_at,
                reviewed_by=optimistic.reviewed_by,
            )
            return StepResult()

        async def load_applicant(results: dict[str, Any]) -> StepResult:
            gateway = self.resolver.gateway_for("get_identity")
            applicant = await gateway.get_identity(application.user_id)
            if applicant is None:
                raise NotFoundError(
                    "Applicant profile not found",
                    resource_type="Identity",
                    resource_id=application.user_id,
                )
            return StepResult(value=applicant)

        async def persist_role(results: dict[str, Any]) -> StepResult:
            applicant = results["load_applicant"]
            role = merge_seller_role(applicant.role)
            gateway = self.resolver.gateway_for("update_identity_role")
            await gateway.update_identity_role(applicant.id, role)
            return StepResult(value=role)

        async def provision_profile(results: dict[str, Any]) -> StepResult:
            profile = SellerProfile.provision_from(application, at=optimistic.reviewed_at)
            gateway = self.resolver.gateway_for("upsert_seller_profile")
            await gateway.upsert_seller_profile(profile)
            return StepResult(value=profile)

        return [
            WorkflowStep("persist_status", persist_status),
            WorkflowStep("load_applicant", load_applicant),
            WorkflowStep("persist_role", persist_role),
            WorkflowStep("provision_profile", provision_profile),
        ]

    def _follow_ups(self, application: SellerApplication) -> list[WorkflowStep]:
        async def log_activity(results: dict[str, Any]) -> StepResult:
            entry = ActivityLogEntry(
                actor_id=reviewer_reference(self.operator_id),
                action_type=APPLICATION_APPROVED,
                details={
                    "application_id": application.id,
                    "user_id": application.user_id,
                    "business_name": results["provision_profile"].business_name,
                    "role": results["persist_role"].value,
                },
                created_at=self.clock(),
            )
            gateway = self.resolver.gateway_for("append_activity_log")
            await gateway.append_activity_log(entry)
            return StepResult(value=entry)

        async def notify_applicant(results: dict[str, Any]) -> StepResult:
            if not application.contact_phone or self.sms_sender is None:
                return StepResult()
            applicant = results["load_applicant"]
            await self.sms_sender.send(
                [application.contact_phone],
                APPROVAL_SMS_MESSAGE.format(platform=self.platform_name),
                template=APPROVAL_SMS_TEMPLATE,
                variables={
                    "first_name": applicant.first_name,
                    "business_name": results["provision_profile"].business_name,
                },
            )
            return StepResult()

        return [
            WorkflowStep("log_activity", log_activity),
            WorkflowStep("notify_applicant", notify_applicant),
        ]
