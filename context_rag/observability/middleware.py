"""
HTTP observability middleware.

CorrelationMiddleware binds the request's correlation ID and echoes it back.
RequestLoggingMiddleware writes one line when a request arrives and one when
it completes, with the elapsed time.

Dependencies: fastapi, starlette, context_rag.observability
System role: Per-request tracing for the API
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from context_rag.observability.correlation import CORRELATION_HEADER, correlation_scope
from context_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log arrival and completion of every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        fields = {"method": request.method, "path": request.url.path}

        log_with_context(
            logger,
            logging.INFO,
            f"{route} - received",
            client_host=request.client.host if request.client else None,
            **fields,
        )
        try:
            response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger, f"{route} - unhandled error", e, duration_ms=_elapsed_ms(started), **fields
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        log_with_context(
            logger,
            level,
            f"{route} - {response.status_code}",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            **fields,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind X-Correlation-ID for the request and return it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
