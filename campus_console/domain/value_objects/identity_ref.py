"""Identity reference checks."""

import re

UUID_REGEX = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Identity used by the system bypass operator. It has no row in the
# identities collection.
SYSTEM_OPERATOR_ID = "00000000-0000-0000-0000-000000000000"


def is_valid_identity_reference(value: str | None) -> bool:
    """
    Check whether a value can be stored as a reference to an identity row.

    The check is syntactic only: the value must be a UUID and must not be
    the system operator's nil identity.

    Args:
        value: Candidate identity id

    Returns:
        True if the value is safe to send as a foreign key
    """
    if not value:
        return False
    if not UUID_REGEX.match(value):
        return False
    return value != SYSTEM_OPERATOR_ID


def reviewer_reference(operator_id: str | None) -> str | None:
    """Return the operator id when it is a valid reference, otherwise None."""
    return operator_id if is_valid_identity_reference(operator_id) else None
