"""Seller application domain exceptions."""

from campus_console.domain.exceptions.base import DomainException


class ApplicationDomainException(DomainException):
    """Base exception for seller-application domain errors."""


class InvalidApplicationTransitionError(ApplicationDomainException):
    """Raised when a status transition is not allowed by the state machine."""

    def __init__(self, current_status: str, target_status: str):
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            message=f"Cannot move application from '{current_status}' to '{target_status}'",
            code="INVALID_APPLICATION_TRANSITION",
        )


class InvalidApplicationStatusError(ApplicationDomainException):
    """Raised when a status value is not one of the known statuses."""

    def __init__(self, status: str):
        super().__init__(
            message=f"Unknown application status: {status}",
            code="INVALID_APPLICATION_STATUS",
        )
