"""Identity domain entity."""

from dataclasses import dataclass
from datetime import datetime

from campus_console.domain.value_objects.role import Role


@dataclass
class Identity:
    """
    A marketplace principal.

    Identities are owned by the backend. Approving a seller application
    changes the role there, through the backend gateway.
    """

    id: str
    role: Role
    full_name: str = ""
    email: str | None = None
    phone: str | None = None
    faculty: str | None = None
    department: str | None = None
    is_active: bool = True
    created_at: datetime | None = None

    @property
    def first_name(self) -> str:
        """First word of the full name, or "User" when no name is known."""
        parts = (self.full_name or "").split()
        return parts[0] if parts else "User"

    def __eq__(self, other: object) -> bool:
        """Entity equality based on identity (id), not value."""
        if not isinstance(other, Identity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on identity."""
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Identity(id={self.id}, role={self.role.value})"
