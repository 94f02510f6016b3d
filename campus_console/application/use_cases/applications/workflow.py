"""
Multi-step review workflows with optimistic state.

A review first flips the application's in-memory status (the optimistic
command), then runs its blocking steps strictly in order. Each step returns
a StepResult that may carry a rollback action. When a blocking step fails,
the collected rollbacks run newest first, which always includes reverting
the optimistic status, and the failure is raised as WorkflowStepError.

Steps already persisted at the backend are not compensated. Follow-up
steps run only after every blocking step succeeded; they are best-effort
and their failures are logged and swallowed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional, Sequence

from campus_console.application.exceptions import WorkflowStepError
from campus_console.domain.entities.seller_application import (
    ApplicationStatus,
    SellerApplication,
)

logger = logging.getLogger(__name__)

Rollback = Callable[[], None]


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step and how to undo its in-memory effect."""

    value: Any = None
    rollback: Optional[Rollback] = None


@dataclass(frozen=True)
class WorkflowStep:
    """
    A named step.

    The action receives the values of the steps that ran before it, keyed
    by step name.
    """

    name: str
    action: Callable[[dict[str, Any]], Awaitable[StepResult]]


@dataclass
class OptimisticStatusChange:
    """Command that marks an application reviewed before the backend confirms."""

    application: SellerApplication
    target: ApplicationStatus
    reviewed_at: datetime
    reviewed_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    previous: Optional[ApplicationStatus] = field(default=None, init=False)

    def apply(self) -> StepResult:
        self.previous = self.application.mark(
            self.target,
            reviewed_at=self.reviewed_at,
            reviewed_by=self.reviewed_by,
            rejection_reason=self.rejection_reason,
        )
        return StepResult(value=self.previous, rollback=self.revert)

    def revert(self) -> None:
        self.application.revert_to_pending()
        logger.info(f"Reverted {self.application!r} to pending")


class WorkflowEngine:
    """Runs an optimistic command followed by blocking and best-effort steps."""

    async def run(
        self,
        workflow: str,
        optimistic: OptimisticStatusChange,
        steps: Sequence[WorkflowStep],
        follow_ups: Sequence[WorkflowStep] = (),
    ) -> dict[str, Any]:
        """
        Execute a workflow.

        Args:
            workflow: Workflow name, used in errors and logs
            optimistic: In-memory change applied before any step
            steps: Blocking steps, run in order
            follow_ups: Best-effort steps, run after all blocking steps

        Returns:
            Step values keyed by step name

        Raises:
            WorkflowStepError: If a blocking step fails
        """
        rollbacks: list[Rollback] = []
        applied = optimistic.apply()
        if applied.rollback is not None:
            rollbacks.append(applied.rollback)

        results: dict[str, Any] = {}
        for step in steps:
            try:
                result = await step.action(results)
            except Exception as exc:
                logger.error(f"{workflow}: step '{step.name}' failed", exc_info=True)
                self._unwind(workflow, rollbacks)
                raise WorkflowStepError(workflow=workflow, step=step.name, cause=exc) from exc

            results[step.name] = result.value
            if result.rollback is not None:
                rollbacks.append(result.rollback)
            logger.debug(f"{workflow}: step '{step.name}' done")

        for step in follow_ups:
            try:
                result = await step.action(results)
            except Exception:
                logger.error(f"{workflow}: best-effort step '{step.name}' failed", exc_info=True)
                continue
            results[step.name] = result.value

        return results

    @staticmethod
    def _unwind(workflow: str, rollbacks: list[Rollback]) -> None:
        for rollback in reversed(rollbacks):
            try:
                rollback()
            except Exception:
                logger.error(f"{workflow}: rollback failed", exc_info=True)
