"""Domain exceptions package."""

from campus_console.domain.exceptions.base import DomainException
from campus_console.domain.exceptions.application_exceptions import (
    ApplicationDomainException,
    InvalidApplicationStatusError,
    InvalidApplicationTransitionError,
)
from campus_console.domain.exceptions.identity_exceptions import (
    IdentityDomainException,
    InvalidRoleError,
)
from campus_console.domain.exceptions.session_exceptions import (
    IncompleteBypassSessionError,
    SessionDomainException,
)

__all__ = [
    # Base
    "DomainException",
    # Application exceptions
    "ApplicationDomainException",
    "InvalidApplicationStatusError",
    "InvalidApplicationTransitionError",
    # Identity exceptions
    "IdentityDomainException",
    "InvalidRoleError",
    # Session exceptions
    "SessionDomainException",
    "IncompleteBypassSessionError",
]
