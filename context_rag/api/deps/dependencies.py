"""
Dependency injection container.

Factory functions for FastAPI dependencies. Components are built lazily
from settings and cached for the process lifetime, so every request shares
one document index.

Dependencies: context_rag.configs, context_rag.core, context_rag.boundary
System role: DI container for service injection
"""

import logging
from functools import lru_cache

from context_rag.boundary.context_repository import ContextRepository, InMemoryContextRepository
from context_rag.boundary.llm import build_embedding_backend, build_generation_backend
from context_rag.configs import Settings, get_settings
from context_rag.core.document_processing import DocumentIndex, Embedder, SentenceChunker
from context_rag.core.rag_query import (
    AnswerSynthesizer,
    QuickMatcher,
    RAGOrchestrator,
    build_strategy,
)

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None):
        self._settings = settings
        self._repository = None
        self._embedder = None
        self._index = None
        self._synthesizer = None
        self._orchestrator = None

    @property
    def settings(self) -> Settings:
        """Settings used to build every component."""
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def repository(self) -> ContextRepository:
        """Get cached context repository, seeded from settings."""
        if self._repository is None:
            self._repository = InMemoryContextRepository(self.settings.search.seed_contexts)
        return self._repository

    @property
    def embedder(self) -> Embedder:
        """Get cached embedder."""
        if self._embedder is None:
            config = self.settings.embedding
            self._embedder = Embedder(
                backend=build_embedding_backend(config),
                timeout_seconds=config.timeout_seconds,
                max_input_chars=config.max_input_chars,
                fallback_enabled=config.fallback_enabled,
                fallback_dimension=config.fallback_dimension,
            )
        return self._embedder

    @property
    def index(self) -> DocumentIndex:
        """Get cached document index."""
        if self._index is None:
            search = self.settings.search
            self._index = DocumentIndex(
                embedder=self.embedder,
                chunker=SentenceChunker(target_size=search.chunk_size),
                batch_size=search.ingest_batch_size,
                batch_delay_seconds=search.ingest_batch_delay_seconds,
            )
        return self._index

    @property
    def synthesizer(self) -> AnswerSynthesizer:
        """Get cached answer synthesizer."""
        if self._synthesizer is None:
            config = self.settings.generation
            self._synthesizer = AnswerSynthesizer(
                backend=build_generation_backend(config),
                context_char_budget=self.settings.search.context_char_budget,
                max_tokens=config.max_tokens,
                temperature=config.temperature,
                timeout_seconds=config.timeout_seconds,
            )
        return self._synthesizer

    @property
    def orchestrator(self) -> RAGOrchestrator:
        """Get cached RAG orchestrator."""
        if self._orchestrator is None:
            search = self.settings.search
            self._orchestrator = RAGOrchestrator(
                repository=self.repository,
                index=self.index,
                strategy=build_strategy(search, self.embedder),
                synthesizer=self.synthesizer,
                quick_matcher=QuickMatcher() if search.quick_match_enabled else None,
                top_k=search.top_k,
            )
            logger.info(
                f"{__name__}:orchestrator - Built orchestrator with strategy "
                f"{self._orchestrator.strategy.name}"
            )
        return self._orchestrator

    def clear(self) -> None:
        """Clear all cached instances."""
        self._repository = None
        self._embedder = None
        self._index = None
        self._synthesizer = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_orchestrator() -> RAGOrchestrator:
    """
    Get the shared RAG orchestrator.

    Returns:
        RAGOrchestrator: Orchestrator holding the process-wide document index
    """
    return get_service_cache().orchestrator
