"""Backend adapters: REST client, both gateways, session checker and stats reader."""

from campus_console.infrastructure.adapters.outbound.backend.direct_table_gateway import (
    DirectTableGateway,
)
from campus_console.infrastructure.adapters.outbound.backend.remote_procedure_gateway import (
    RemoteProcedureGateway,
)
from campus_console.infrastructure.adapters.outbound.backend.rest_client import BackendRestClient
from campus_console.infrastructure.adapters.outbound.backend.session_checker import (
    BackendSessionChecker,
)
from campus_console.infrastructure.adapters.outbound.backend.stats_reader import BackendStatsReader

__all__ = [
    "BackendRestClient",
    "BackendSessionChecker",
    "BackendStatsReader",
    "DirectTableGateway",
    "RemoteProcedureGateway",
]
