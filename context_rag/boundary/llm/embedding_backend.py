"""
LangChain embedding backend.

Adapts any LangChain ``Embeddings`` implementation to the EmbeddingBackend
protocol.

Dependencies: langchain_core
System role: Embedding provider adapter
"""

from langchain_core.embeddings import Embeddings


class LangChainEmbeddingBackend:
    """EmbeddingBackend over a LangChain Embeddings instance."""

    def __init__(self, embeddings: Embeddings, name: str) -> None:
        """
        Initialize backend.

        Args:
            embeddings: LangChain embeddings client
            name: Identifier used in logs (provider:model)
        """
        self._embeddings = embeddings
        self._name = name

    @property
    def name(self) -> str:
        """Identifier for logging."""
        return self._name

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Text to embed (already truncated by the caller)

        Returns:
            list[float]: Embedding vector as returned by the provider
        """
        vector = await self._embeddings.aembed_query(text)
        return [float(value) for value in vector]
