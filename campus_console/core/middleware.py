"""
Custom middleware for FastAPI application.

This module provides:
- Request ID tracking
- Request logging tagged with the calling convention in force
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from campus_console.core.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns every request an id.

    A client-supplied X-Request-ID is kept, otherwise a UUID is generated.
    The id lands in request.state.request_id, in log records and in the
    response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _convention_of(request: Request) -> str:
    console = getattr(request.app.state, "console", None)
    if console is None:
        return "none"
    return console.resolver.convention_for(request.url.path).value


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request once it completes.

    2xx/3xx are logged at INFO, 4xx at WARNING, 5xx and unhandled errors at
    ERROR. The calling convention is the one in force when the request
    finished, so a login or a revocation during the request shows up.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        request_id = getattr(request.state, "request_id", "unknown")
        route = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                f"{route} failed - request_id={request_id} "
                f"duration={time.perf_counter() - started:.3f}s error={exc}",
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            f"{route} {response.status_code} - request_id={request_id} "
            f"convention={_convention_of(request)} duration={duration:.3f}s"
        )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response
