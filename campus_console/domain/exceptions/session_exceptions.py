"""Bypass session domain exceptions."""

from campus_console.domain.exceptions.base import DomainException


class SessionDomainException(DomainException):
    """Base exception for bypass-session domain errors."""


class IncompleteBypassSessionError(SessionDomainException):
    """Raised when a bypass session is created without secret or token."""

    def __init__(self, missing: str):
        super().__init__(
            message=f"Bypass session is missing its {missing}",
            code="INCOMPLETE_BYPASS_SESSION",
        )
