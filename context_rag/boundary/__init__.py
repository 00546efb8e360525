"""
Boundary layer for external systems.

- context_repository: context registry lookup
- llm: embedding and generation providers
"""

from context_rag.boundary.context_repository import ContextRepository, InMemoryContextRepository

__all__ = ["ContextRepository", "InMemoryContextRepository"]
