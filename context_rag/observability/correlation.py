"""
Request correlation IDs.

Each HTTP request gets one ID, taken from the caller's X-Correlation-ID header
when it looks sane and generated otherwise. The ID lives in a ContextVar so
it follows the request through awaits and the concurrent embedding calls of
an ingest.

Dependencies: contextvars, uuid
System role: Request tracing for logs and response headers
"""

import re
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"

# Caller-supplied IDs end up in log lines; reject anything that could forge one
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Incoming ID; a fresh UUID4 is used when missing or malformed

    Returns:
        str: The ID now bound
    """
    if not correlation_id or not _ACCEPTED_ID.match(correlation_id):
        correlation_id = str(uuid.uuid4())
    correlation_id_ctx.set(correlation_id)
    return correlation_id


def get_correlation_id() -> str:
    """Current correlation ID, or '' outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    Restores whatever ID was bound before, so nested scopes behave.

    Yields:
        str: The ID bound inside the block
    """
    token = correlation_id_ctx.set("")
    try:
        yield set_correlation_id(correlation_id)
    finally:
        correlation_id_ctx.reset(token)
