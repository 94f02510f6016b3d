"""Read-only port used by the stats reconciler."""

from typing import Any, Optional, Protocol

from campus_console.application.ports.outbound.query import Collection, Filter, Order


class StatsReaderPort(Protocol):
    """Count and select rows for dashboard aggregation."""

    async def count(
        self,
        collection: Collection,
        filters: Optional[list[Filter]] = None,
    ) -> int:
        """
        Count rows matching all filters.

        Args:
            collection: Collection to count
            filters: Predicates combined with AND

        Returns:
            Exact number of matching rows
        """
        ...

    async def select(
        self,
        collection: Collection,
        columns: str = "*",
        filters: Optional[list[Filter]] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """
        Select rows matching all filters.

        Args:
            collection: Collection to read
            columns: Comma-separated column list
            filters: Predicates combined with AND
            order: Sort order
            limit: Maximum number of rows

        Returns:
            Rows as dictionaries
        """
        ...
