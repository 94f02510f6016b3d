"""
SMS sender backed by the Arkesel v2 API.

Plain messages go to ``/sms/send``. When placeholder variables are given,
the personalised ``/sms/template/send`` endpoint is used, which replaces
``<%name%>`` placeholders per recipient.
"""

import logging
from typing import Any, Optional

import httpx

from campus_console.application.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

SERVICE_NAME = "arkesel"


class ArkeselSmsSender:
    """SmsSenderPort implementation for Arkesel."""

    def __init__(self, http_client: httpx.AsyncClient, sender: str):
        """
        Initialize sender.

        Args:
            http_client: Client whose base URL is the Arkesel API root and
                which carries the ``api-key`` header
            sender: Sender id shown on the recipient's phone
        """
        self.http = http_client
        self.sender = sender

    @staticmethod
    def build_http_client(
        base_url: str,
        api_key: str,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"api-key": api_key, "Content-Type": "application/json"},
            timeout=timeout_seconds,
            transport=transport,
        )

    async def send(
        self,
        recipients: list[str],
        message: str,
        template: Optional[str] = None,
        variables: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Send a message.

        Raises:
            ExternalServiceError: If the provider refuses the request
        """
        recipients = [phone for phone in recipients if phone]
        if not recipients:
            logger.debug("No SMS recipients; nothing to send")
            return

        if variables:
            url = "/sms/template/send"
            payload: dict[str, Any] = {
                "sender": self.sender,
                "message": message,
                "recipients": {phone: dict(variables) for phone in recipients},
            }
        else:
            url = "/sms/send"
            payload = {"sender": self.sender, "message": message, "recipients": recipients}

        await self._request("POST", url, json=payload)
        logger.info(
            f"SMS sent to {len(recipients)} recipient(s)"
            + (f" using template {template}" if template else "")
        )

    async def get_balance(self) -> float:
        """
        Return the remaining SMS balance.

        Raises:
            ExternalServiceError: If the provider refuses the request or
                the response has no balance
        """
        body = await self._request("GET", "/clients/balance-details")
        data = (body or {}).get("data") or {}
        try:
            return float(data["sms_balance"])
        except (KeyError, TypeError, ValueError):
            raise ExternalServiceError(
                "SMS balance missing from provider response", service=SERVICE_NAME
            ) from None

    async def _request(self, method: str, url: str, **kwargs: Any) -> Optional[dict[str, Any]]:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise ExternalServiceError(
                f"SMS provider request failed: {exc}", service=SERVICE_NAME
            ) from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        status = body.get("status") if isinstance(body, dict) else None
        if response.is_error or (status is not None and status != "success"):
            message = (body or {}).get("message") if isinstance(body, dict) else None
            raise ExternalServiceError(
                message or f"SMS provider returned HTTP {response.status_code}",
                service=SERVICE_NAME,
                status_code=response.status_code,
            )
        return body if isinstance(body, dict) else None

    async def aclose(self) -> None:
        await self.http.aclose()
