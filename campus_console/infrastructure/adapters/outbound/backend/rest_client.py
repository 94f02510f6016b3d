"""
HTTP client for the hosted data backend.

Wraps the backend's PostgREST-style REST interface:

- table endpoints at ``/rest/v1/{table}`` with filters in the query string
  (``column=eq.value``) and behaviour negotiated through ``Prefer``;
- remote procedures at ``/rest/v1/rpc/{name}`` taking a JSON payload.

Errors are translated into application exceptions here so both gateways
report failures the same way.
"""

import logging
from typing import Any, Optional

import httpx

from campus_console.application.exceptions import AuthorizationError, ExternalServiceError
from campus_console.application.ports.outbound.query import Filter, FilterOp, Order

logger = logging.getLogger(__name__)

# insufficient_privilege, and the JWT errors PostgREST raises for bad tokens
AUTHORIZATION_ERROR_CODES = frozenset({"42501", "PGRST301", "PGRST302"})


def encode_value(value: Any) -> str:
    """Render a filter value the way PostgREST expects it in a query string."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_filter(filter_: Filter) -> tuple[str, str]:
    """
    Convert a Filter into a query-string parameter.

    Args:
        filter_: Filter to encode

    Returns:
        (column, "op.value") pair
    """
    if filter_.op is FilterOp.IN:
        items = ",".join(f'"{encode_value(item)}"' for item in filter_.value)
        return filter_.column, f"in.({items})"
    return filter_.column, f"{filter_.op.value}.{encode_value(filter_.value)}"


def parse_total_count(content_range: Optional[str]) -> int:
    """
    Read the total from a Content-Range header such as ``0-24/3573`` or ``*/0``.

    Raises:
        ExternalServiceError: If the header is missing or has no exact total
    """
    if not content_range or "/" not in content_range:
        raise ExternalServiceError("Backend did not return a row count", service="backend")
    total = content_range.rsplit("/", 1)[1]
    if not total.isdigit():
        raise ExternalServiceError(
            f"Backend returned an inexact row count: {content_range}", service="backend"
        )
    return int(total)


class BackendRestClient:
    """Thin async client over table and RPC endpoints."""

    def __init__(self, http_client: httpx.AsyncClient, service: str = "backend"):
        """
        Initialize client.

        Args:
            http_client: Client whose base URL points at ``{backend_url}/rest/v1``
                and which already carries the API key and bearer token
            service: Service name used in errors
        """
        self.http = http_client
        self.service = service

    @staticmethod
    def build_http_client(
        backend_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> httpx.AsyncClient:
        """
        Create the underlying httpx client.

        Args:
            backend_url: Backend base URL
            api_key: Public API key of the project
            access_token: Operator's access token; the API key is used when absent
            timeout_seconds: Request timeout
            transport: Custom transport (tests)

        Returns:
            Configured AsyncClient
        """
        return httpx.AsyncClient(
            base_url=f"{backend_url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    async def select(
        self,
        table: str,
        columns: str = "*",
        filters: Optional[list[Filter]] = None,
        order: Optional[Order] = None,
        limit: Optional[int] = None,
    ) -> list[dict[str, Any]]:
        """Read rows from a table."""
        params = self._params(filters)
        params.insert(0, ("select", columns))
        if order is not None:
            direction = "asc" if order.ascending else "desc"
            params.append(("order", f"{order.column}.{direction}"))
        if limit is not None:
            params.append(("limit", str(limit)))

        response = await self._send("GET", f"/{table}", table, params=params)
        return response.json()

    async def count(self, table: str, filters: Optional[list[Filter]] = None) -> int:
        """Count rows in a table without transferring them."""
        response = await self._send(
            "HEAD",
            f"/{table}",
            table,
            params=[("select", "*"), *self._params(filters)],
            headers={"Prefer": "count=exact"},
        )
        return parse_total_count(response.headers.get("content-range"))

    async def insert(self, table: str, rows: dict[str, Any] | list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Insert one or more rows and return them as stored."""
        response = await self._send(
            "POST",
            f"/{table}",
            table,
            json=rows,
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response)

    async def update(
        self, table: str, values: dict[str, Any], filters: list[Filter]
    ) -> list[dict[str, Any]]:
        """
        Update matching rows.

        Returns:
            Rows actually updated; empty when no row matched or row-level
            security hid every candidate row
        """
        response = await self._send(
            "PATCH",
            f"/{table}",
            table,
            params=self._params(filters),
            json=values,
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response)

    async def upsert(
        self, table: str, rows: dict[str, Any] | list[dict[str, Any]], on_conflict: str
    ) -> list[dict[str, Any]]:
        """Insert rows, merging into existing ones that share the conflict key."""
        response = await self._send(
            "POST",
            f"/{table}",
            table,
            params=[("on_conflict", on_conflict)],
            json=rows,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        )
        return self._rows(response)

    async def delete(self, table: str, filters: list[Filter]) -> list[dict[str, Any]]:
        """Delete matching rows and return them."""
        response = await self._send(
            "DELETE",
            f"/{table}",
            table,
            params=self._params(filters),
            headers={"Prefer": "return=representation"},
        )
        return self._rows(response)

    async def rpc(self, name: str, payload: dict[str, Any]) -> Any:
        """
        Call a remote procedure.

        Returns:
            Decoded JSON result, or None for an empty body
        """
        response = await self._send("POST", f"/rpc/{name}", name, json=payload)
        if not response.content:
            return None
        return response.json()

    async def aclose(self) -> None:
        await self.http.aclose()

    @staticmethod
    def _params(filters: Optional[list[Filter]]) -> list[tuple[str, str]]:
        return [encode_filter(f) for f in filters or []]

    @staticmethod
    def _rows(response: httpx.Response) -> list[dict[str, Any]]:
        if not response.content:
            return []
        data = response.json()
        return data if isinstance(data, list) else [data]

    async def _send(self, method: str, url: str, operation: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"{self.service} request {method} {url} failed: {exc}")
            raise ExternalServiceError(
                f"Backend request failed: {exc}", service=self.service
            ) from exc

        if response.is_error:
            self._raise_for_error(response, operation)
        return response

    def _raise_for_error(self, response: httpx.Response, operation: str) -> None:
        message, code = self._error_body(response)
        logger.warning(
            f"{self.service} rejected {operation}: {response.status_code} {code or ''} {message}"
        )

        if response.status_code in (401, 403) or code in AUTHORIZATION_ERROR_CODES:
            raise AuthorizationError(message, operation=operation, backend_code=code)
        raise ExternalServiceError(
            message,
            service=self.service,
            status_code=response.status_code,
            backend_code=code,
        )

    @staticmethod
    def _error_body(response: httpx.Response) -> tuple[str, Optional[str]]:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            message = body.get("message") or body.get("msg") or body.get("error")
            code = body.get("code")
            if message:
                return str(message), str(code) if code is not None else None
        text = response.text.strip()
        return text or f"HTTP {response.status_code}", None
