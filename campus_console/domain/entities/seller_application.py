"""Seller application domain entity."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from campus_console.domain.exceptions import (
    InvalidApplicationStatusError,
    InvalidApplicationTransitionError,
)


class ApplicationStatus(str, Enum):
    """Lifecycle status of a seller application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def parse(cls, value: "str | ApplicationStatus") -> "ApplicationStatus":
        """
        Convert a raw status string into an ApplicationStatus.

        Raises:
            InvalidApplicationStatusError: If the value is not a known status
        """
        if isinstance(value, ApplicationStatus):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidApplicationStatusError(str(value)) from None


# Forward transitions the review workflow may perform. Cancellation is
# done by the applicant and never by the console.
_REVIEW_TRANSITIONS: dict[ApplicationStatus, frozenset[ApplicationStatus]] = {
    ApplicationStatus.PENDING: frozenset(
        {ApplicationStatus.APPROVED, ApplicationStatus.REJECTED}
    ),
    ApplicationStatus.APPROVED: frozenset(),
    ApplicationStatus.REJECTED: frozenset(),
    ApplicationStatus.CANCELLED: frozenset(),
}


@dataclass
class SellerApplication:
    """
    A pending request from an identity to gain selling capability.

    Status only moves forward (pending to approved or rejected), except
    when an optimistic review is reverted back to pending after a failed
    workflow.
    """

    id: str
    user_id: str
    business_name: str
    business_category: str = ""
    business_description: str = ""
    contact_phone: str | None = None
    contact_email: str | None = None
    business_logo: str | None = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    applicant_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    reviewed_at: datetime | None = None
    reviewed_by: str | None = None
    rejection_reason: str | None = None

    @property
    def is_pending(self) -> bool:
        return self.status is ApplicationStatus.PENDING

    def can_transition_to(self, target: ApplicationStatus) -> bool:
        """Check whether the review workflow may move to the target status."""
        return target in _REVIEW_TRANSITIONS[self.status]

    def ensure_can_transition_to(self, target: ApplicationStatus) -> None:
        """
        Guard a review transition.

        Raises:
            InvalidApplicationTransitionError: If the transition is not allowed
        """
        if not self.can_transition_to(target):
            raise InvalidApplicationTransitionError(self.status.value, target.value)

    def mark(self, target: ApplicationStatus, reviewed_at: datetime | None = None,
             reviewed_by: str | None = None,
             rejection_reason: str | None = None) -> ApplicationStatus:
        """
        Move to a reviewed status.

        Args:
            target: APPROVED or REJECTED
            reviewed_at: Review timestamp
            reviewed_by: Reviewer identity id, if it is a valid reference
            rejection_reason: Reason when rejecting

        Returns:
            The status held before the change

        Raises:
            InvalidApplicationTransitionError: If the transition is not allowed
        """
        self.ensure_can_transition_to(target)
        previous = self.status
        self.status = target
        self.reviewed_at = reviewed_at
        self.reviewed_by = reviewed_by
        if target is ApplicationStatus.REJECTED:
            self.rejection_reason = rejection_reason
        return previous

    def revert_to_pending(self) -> None:
        """Undo an optimistic review after the workflow failed."""
        if self.status not in (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED):
            raise InvalidApplicationTransitionError(
                self.status.value, ApplicationStatus.PENDING.value
            )
        self.status = ApplicationStatus.PENDING
        self.reviewed_at = None
        self.reviewed_by = None
        self.rejection_reason = None

    def __eq__(self, other: object) -> bool:
        """Entity equality based on identity (id), not value."""
        if not isinstance(other, SellerApplication):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on identity."""
        return hash(self.id)

    def __repr__(self) -> str:
        return (
            f"SellerApplication(id={self.id}, business_name={self.business_name!r}, "
            f"status={self.status.value})"
        )
