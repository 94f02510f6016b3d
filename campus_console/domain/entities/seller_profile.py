"""Seller profile domain entity."""

from dataclasses import dataclass
from datetime import datetime

from campus_console.domain.entities.seller_application import SellerApplication

DEFAULT_BUSINESS_NAME = "New Business"
DEFAULT_BUSINESS_CATEGORY = "General"


@dataclass
class SellerProfile:
    """
    Business record of an approved seller.

    Keyed by the applicant's identity id: there is at most one profile
    per identity and provisioning is always an upsert on that key.
    """

    user_id: str
    business_name: str
    business_category: str
    business_description: str
    contact_phone: str | None = None
    contact_email: str | None = None
    business_logo: str | None = None
    is_active: bool = True
    updated_at: datetime | None = None

    @classmethod
    def provision_from(cls, application: SellerApplication,
                       at: datetime | None = None) -> "SellerProfile":
        """
        Build the profile an approved application provisions.

        Empty business name and category fall back to defaults, and an
        empty description becomes a greeting built from the business name.
        """
        business_name = (application.business_name or "").strip() or DEFAULT_BUSINESS_NAME
        category = (application.business_category or "").strip() or DEFAULT_BUSINESS_CATEGORY
        description = (application.business_description or "").strip()
        if not description:
            description = f"Welcome to {business_name}!"

        return cls(
            user_id=application.user_id,
            business_name=business_name,
            business_category=category,
            business_description=description,
            contact_phone=application.contact_phone,
            contact_email=application.contact_email,
            business_logo=application.business_logo,
            is_active=True,
            updated_at=at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SellerProfile):
            return False
        return self.user_id == other.user_id

    def __hash__(self) -> int:
        return hash(self.user_id)
