"""
Root logging setup.

One stdout handler for the whole process. Every line carries the request's
correlation ID, and provider HTTP clients are quietened to WARNING so a
single ingest does not print one line per embedding call.

Dependencies: logging (stdlib), context_rag.observability.correlation
System role: Logging configuration applied at application startup
"""

import logging
import sys

from context_rag.observability.correlation import get_correlation_id

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(correlation_id)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "google_genai", "openai")


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the bound correlation ID ('-' outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def _stdout_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler on the root logger.

    Safe to call more than once; previously installed handlers are replaced.

    Args:
        level: Level name, case-insensitive; unknown names fall back to INFO
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(_stdout_handler())
    resolved = getattr(logging, level.upper(), None)
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
