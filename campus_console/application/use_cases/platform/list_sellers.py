"""List sellers use case."""

import logging

from campus_console.application.dto.platform_dto import SellerOutput
from campus_console.application.services.credential_resolver import CredentialResolver

logger = logging.getLogger(__name__)


class ListSellersUseCase:
    """Use case for listing identities that can sell."""

    def __init__(self, resolver: CredentialResolver):
        self.resolver = resolver

    async def execute(self) -> list[SellerOutput]:
        """
        List sellers, sorted by name.

        Identities the backend returns without selling capability are left out.

        Returns:
            Sellers and publisher-sellers
        """
        gateway = self.resolver.gateway_for("list_sellers")
        identities = await gateway.list_sellers()

        sellers = [identity for identity in identities if identity.role.can_sell]
        if len(sellers) < len(identities):
            logger.warning(f"Dropped {len(identities) - len(sellers)} non-seller identities")

        sellers.sort(key=lambda identity: (identity.full_name or "").lower())
        return [SellerOutput.from_entity(identity) for identity in sellers]
