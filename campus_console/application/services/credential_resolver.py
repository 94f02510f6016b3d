"""
Credential resolution for administrative backend calls.

Every administrative call goes through one of two gateways:

- the direct-table gateway, authenticated as the operator's own identity
  and constrained by the backend's row-level policies;
- the remote-procedure gateway, which passes the bypass secret explicitly.

The choice is made per call by a pure function of the session in force.
"""

import logging
from typing import Callable, Optional

from campus_console.application.ports.outbound.backend_gateway_port import (
    BackendGatewayPort,
    CallingConvention,
)
from campus_console.application.services.session_context import SessionContext
from campus_console.domain.value_objects.bypass_session import BypassSession

logger = logging.getLogger(__name__)


def resolve_calling_convention(session: Optional[BypassSession]) -> CallingConvention:
    """
    Decide which calling convention a call must use.

    Args:
        session: Bypass session in force, if any

    Returns:
        REMOTE_PROCEDURE when the bypass flag is set and a secret is present,
        DIRECT_TABLE otherwise
    """
    if session is not None and session.grants_bypass:
        return CallingConvention.REMOTE_PROCEDURE
    return CallingConvention.DIRECT_TABLE


class CredentialResolver:
    """
    Hands out the gateway a given action must use.

    There is no fallback between conventions: when the remote-procedure
    gateway is chosen and the backend rejects the secret, that error
    reaches the caller unchanged.
    """

    def __init__(
        self,
        context: SessionContext,
        direct_gateway: BackendGatewayPort,
        procedure_gateway_factory: Callable[[str], BackendGatewayPort],
    ):
        """
        Initialize resolver.

        Args:
            context: Session context holding the bypass session
            direct_gateway: Gateway for the direct-table convention
            procedure_gateway_factory: Builds a remote-procedure gateway for a secret
        """
        self.context = context
        self._direct_gateway = direct_gateway
        self._procedure_gateway_factory = procedure_gateway_factory

    def convention_for(self, action: str) -> CallingConvention:
        """Return the calling convention the action will use right now."""
        return resolve_calling_convention(self.context.current)

    def gateway_for(self, action: str) -> BackendGatewayPort:
        """
        Return the gateway for an action.

        Args:
            action: Action name, used for logging

        Returns:
            Gateway implementing the resolved calling convention
        """
        session = self.context.current
        convention = resolve_calling_convention(session)
        logger.debug(f"Resolved {convention.value} convention for {action}")

        if convention is CallingConvention.REMOTE_PROCEDURE:
            return self._procedure_gateway_factory(session.secret)
        return self._direct_gateway
