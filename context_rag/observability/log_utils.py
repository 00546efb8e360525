"""
Structured log helpers.

Queries, document text and embedding vectors are routinely passed as log
extras. These helpers reduce such values to short strings before they reach
a handler and tag every record with the request correlation ID.

Dependencies: logging (stdlib), context_rag.observability.correlation
System role: Helpers used by the request logging middleware
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from context_rag.observability.correlation import get_correlation_id

MAX_VALUE_LENGTH = 500


def safe_log_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """
    Render a value as a bounded string.

    Lists, tuples and dicts are reported by size only.

    Args:
        value: Anything
        max_length: Characters kept before truncation

    Returns:
        str: Log-safe rendering
    """
    if isinstance(value, Mapping):
        rendered = f"dict({len(value)} keys)"
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        rendered = f"{type(value).__name__}({len(value)} items)"
    else:
        rendered = str(value)

    if len(rendered) <= max_length:
        return rendered
    return f"{rendered[:max_length]}... (truncated, {len(rendered)} total)"


def _record_extras(fields: dict[str, Any]) -> dict[str, str]:
    extras = {"request_correlation_id": get_correlation_id()}
    extras.update((key, safe_log_value(value)) for key, value in fields.items())
    return extras


def log_with_context(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log `message` with `fields` attached as stringified record attributes."""
    logger.log(level, message, extra=_record_extras(fields))


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **fields: Any,
) -> None:
    """
    Log an exception at ERROR with its traceback.

    Args:
        logger: Destination logger
        message: Summary line
        exc: Exception being reported
        **fields: Extra record attributes
    """
    extras = _record_extras(fields)
    extras["error_type"] = type(exc).__name__
    extras["error_msg"] = safe_log_value(exc)
    logger.error(message, exc_info=exc, extra=extras)
