"""Identity and role domain exceptions."""

from campus_console.domain.exceptions.base import DomainException


class IdentityDomainException(DomainException):
    """Base exception for identity-related domain errors."""


class InvalidRoleError(IdentityDomainException):
    """Raised when a role value is not part of the capability set."""

    def __init__(self, role: str):
        super().__init__(message=f"Unknown role: {role}", code="INVALID_ROLE")
