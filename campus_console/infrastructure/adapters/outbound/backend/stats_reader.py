"""Read-only backend access for dashboard statistics."""

from typing import Any, Optional

from campus_console.application.ports.outbound.query import Collection, Filter, Order
from campus_console.infrastructure.adapters.outbound.backend.rest_client import BackendRestClient


class BackendStatsReader:
    """StatsReaderPort implementation over the table endpoints."""

    def __init__(self, client: BackendRestClient):
        self.client = client

    async def count(self, collection: Collection, filters: Optional[list[Filter]] = None) -> int:
        return await self.client.count(collection.value, filters)

    async def select(
        self,
        collection: Collection,
        columns: str = "*",
        filters: Optional[list[Filter]] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        return await self.client.select(
            collection.value, columns=columns, filters=filters, order=order, limit=limit
        )
