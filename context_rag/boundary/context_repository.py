"""
Context registry access.

The context registry (names, descriptions, document library URLs) is owned
by an external store. The core reads it through ContextRepository; the
in-memory implementation serves single-process deployments and tests.

Dependencies: context_rag.models
System role: Context lookup boundary
"""

import logging
import threading
from typing import Protocol, runtime_checkable

from context_rag.models.context import ContextRecord

logger = logging.getLogger(__name__)


@runtime_checkable
class ContextRepository(Protocol):
    """Lookup and maintenance of context records by ID."""

    def get(self, context_id: int) -> ContextRecord | None:
        ...

    def set(self, record: ContextRecord) -> None:
        ...

    def list(self) -> list[ContextRecord]:
        ...

    def delete(self, context_id: int) -> bool:
        ...


class InMemoryContextRepository:
    """Thread-safe dictionary-backed ContextRepository."""

    def __init__(self, records: list[ContextRecord] | None = None) -> None:
        """
        Initialize repository.

        Args:
            records: Contexts registered up front
        """
        self._records: dict[int, ContextRecord] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.set(record)

    def get(self, context_id: int) -> ContextRecord | None:
        return self._records.get(context_id)

    def set(self, record: ContextRecord) -> None:
        with self._lock:
            self._records[record.id] = record
        logger.debug(f"{__name__}:set - Registered context {record.id} ({record.name})")

    def list(self) -> list[ContextRecord]:
        return sorted(self._records.values(), key=lambda record: record.id)

    def delete(self, context_id: int) -> bool:
        """Remove a context; returns False if it was not registered."""
        with self._lock:
            removed = self._records.pop(context_id, None)
        return removed is not None
