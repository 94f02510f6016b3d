"""Seller application use cases."""

from campus_console.application.use_cases.applications.approve_application import (
    ApproveApplicationUseCase,
)
from campus_console.application.use_cases.applications.list_applications import (
    ListApplicationsUseCase,
)
from campus_console.application.use_cases.applications.reject_application import (
    RejectApplicationUseCase,
)
from campus_console.application.use_cases.applications.workflow import (
    OptimisticStatusChange,
    StepResult,
    WorkflowEngine,
    WorkflowStep,
)

__all__ = [
    "ApproveApplicationUseCase",
    "ListApplicationsUseCase",
    "OptimisticStatusChange",
    "RejectApplicationUseCase",
    "StepResult",
    "WorkflowEngine",
    "WorkflowStep",
]
