"""
Middleware configuration for the application.
Includes Correlation ID setup and request logging middleware.
"""

import time
import structlog
from typing import Callable
from fastapi import FastAPI, Request, Response
from asgi_correlation_id import CorrelationIdMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with timing.

    Method and path are bound to the structlog context for the duration of
    the request, so repository and service log lines carry them too.
    Unexpected exceptions are logged here once, with traceback, before the
    global handler renders the 500 body.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        with structlog.contextvars.bound_contextvars(method=request.method, path=request.url.path):
            logger.info(
                "Request started",
                client_ip=request.client.host if request.client else "unknown",
            )
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", process_time_ms=_elapsed_ms(start))
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                process_time_ms=_elapsed_ms(start),
            )
            return response


def setup_middleware(app: FastAPI) -> None:
    """Setup all middleware for the application."""

    # Starlette runs the last added middleware first; the correlation id
    # has to be set before request logging runs.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
