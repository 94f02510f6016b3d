"""Role merge policy for seller approvals."""

from campus_console.domain.value_objects.role import Role


def merge_seller_role(current: Role) -> Role:
    """
    Compute the role an identity holds after its seller application is approved.

    Seller capability is added on top of what the identity already has:

    - publishing roles (news_publisher, publisher_seller) become publisher_seller
    - administrative roles (admin, super_admin) are kept unchanged
    - every other role becomes seller

    Args:
        current: Role held before approval

    Returns:
        Role to persist
    """
    if current.can_publish:
        return Role.PUBLISHER_SELLER
    if current.is_administrative:
        return current
    return Role.SELLER
