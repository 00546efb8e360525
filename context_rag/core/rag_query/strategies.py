"""
Search strategies.

One ranking interface with embedding, keyword and chained implementations,
selected by SEARCH_STRATEGY. Strategies never raise for ranking problems
the pipeline can recover from; the chained strategy degrades to its
fallback instead.

Dependencies: context_rag.core.document_processing, context_rag.configs
System role: Retrieval strategy selection
"""

import logging
from typing import Protocol, runtime_checkable

from context_rag.configs.search import SearchSettings
from context_rag.core.document_processing.embedder import Embedder
from context_rag.core.exceptions import EmbeddingError, RetrievalError
from context_rag.core.rag_query.keyword_search import KeywordSearch
from context_rag.core.rag_query.similarity import SimilaritySearch
from context_rag.models.chunk import DocumentChunk
from context_rag.models.search import SearchResult

logger = logging.getLogger(__name__)


@runtime_checkable
class SearchStrategy(Protocol):
    """Ranks a context's chunks for a query."""

    name: str

    async def rank(self, query: str, chunks: list[DocumentChunk], limit: int) -> list[SearchResult]:
        ...


class EmbeddingStrategy:
    """Embed the query and rank chunks by cosine similarity."""

    name = "embedding"

    def __init__(
        self,
        embedder: Embedder,
        similarity_threshold: float = 0.0,
        similarity: SimilaritySearch | None = None,
    ) -> None:
        """
        Initialize strategy.

        Args:
            embedder: Query embedder
            similarity_threshold: Results scoring at or below this are dropped
            similarity: Ranker (defaults to SimilaritySearch)
        """
        self._embedder = embedder
        self._threshold = similarity_threshold
        self._similarity = similarity or SimilaritySearch()

    async def rank(self, query: str, chunks: list[DocumentChunk], limit: int) -> list[SearchResult]:
        """
        Rank chunks by similarity to the query embedding.

        Raises:
            RetrievalError: When the query cannot be embedded
        """
        if not chunks:
            return []
        try:
            query_vector = await self._embedder.embed(query)
        except EmbeddingError as e:
            raise RetrievalError(f"Query embedding failed: {e}", strategy=self.name) from e

        return self._similarity.rank(query_vector, chunks, limit, min_score=self._threshold)


class KeywordStrategy:
    """Rank chunks by keyword score."""

    name = "keyword"

    def __init__(self, keyword_search: KeywordSearch | None = None, max_results: int | None = None) -> None:
        self._keyword_search = keyword_search or KeywordSearch()
        self._max_results = max_results

    async def rank(self, query: str, chunks: list[DocumentChunk], limit: int) -> list[SearchResult]:
        if self._max_results is not None:
            limit = min(limit, self._max_results)
        return self._keyword_search.rank(query, chunks, limit=limit)


class ChainedStrategy:
    """Use the primary strategy, falling back when it yields nothing or fails."""

    def __init__(self, primary: SearchStrategy, fallback: SearchStrategy) -> None:
        """
        Initialize chained strategy.

        Args:
            primary: Strategy tried first
            fallback: Strategy used on an empty or failed primary ranking
        """
        self.primary = primary
        self.fallback = fallback
        self.name = f"{primary.name}+{fallback.name}"

    async def rank(self, query: str, chunks: list[DocumentChunk], limit: int) -> list[SearchResult]:
        """
        Rank with the primary strategy, then the fallback if needed.

        Args:
            query: User query
            chunks: Candidate chunks
            limit: Maximum results

        Returns:
            list[SearchResult]: Results from whichever strategy produced them
        """
        try:
            results = await self.primary.rank(query, chunks, limit)
        except RetrievalError as e:
            logger.warning(
                f"{__name__}:rank - {self.primary.name} failed, using {self.fallback.name}: {e}"
            )
            results = []

        if results:
            return results

        logger.info(
            f"{__name__}:rank - {self.primary.name} found nothing, trying {self.fallback.name}"
        )
        return await self.fallback.rank(query, chunks, limit)


def build_strategy(settings: SearchSettings, embedder: Embedder) -> SearchStrategy:
    """
    Build the configured search strategy.

    Args:
        settings: Search settings
        embedder: Query embedder for embedding-based strategies

    Returns:
        SearchStrategy: Configured strategy

    Raises:
        ValueError: If the strategy name is unknown
    """
    keyword = KeywordStrategy(max_results=settings.keyword_top_k)
    strategy = settings.strategy.lower()

    if strategy == "keyword":
        return keyword

    embedding = EmbeddingStrategy(embedder, similarity_threshold=settings.similarity_threshold)
    if strategy == "embedding":
        return embedding
    if strategy == "hybrid":
        return ChainedStrategy(embedding, keyword)

    raise ValueError(
        f"Invalid SEARCH_STRATEGY: {strategy}. Must be 'embedding', 'keyword' or 'hybrid'."
    )
