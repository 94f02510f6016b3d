"""Outbound SMS port interface."""

from typing import Optional, Protocol


class SmsSenderPort(Protocol):
    """Send text notifications through the SMS provider."""

    async def send(
        self,
        recipients: list[str],
        message: str,
        template: Optional[str] = None,
        variables: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Send one message to a list of phone numbers.

        Args:
            recipients: Phone numbers
            message: Message body; may contain ``<%name%>`` placeholders
            template: Tag identifying the kind of message
            variables: Placeholder values applied to every recipient

        Raises:
            ExternalServiceError: If the provider refuses the request
        """
        ...

    async def get_balance(self) -> float:
        """Return the remaining SMS balance."""
        ...
