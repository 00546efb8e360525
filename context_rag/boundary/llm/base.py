"""
Backend protocols for external model calls.

The core consumes these structural interfaces; LangChain adapters and test
doubles implement them without inheritance.

Dependencies: typing
System role: Contract between the RAG core and external model providers
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbeddingBackend(Protocol):
    """External embedding service."""

    @property
    def name(self) -> str:
        """Identifier for logging (provider:model)."""
        ...

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for text. May raise or hang."""
        ...


@runtime_checkable
class GenerationBackend(Protocol):
    """External text-generation service."""

    @property
    def name(self) -> str:
        """Identifier for logging (provider:model)."""
        ...

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the completion text. May raise or hang."""
        ...
