"""
Shared test fixtures and configuration for entire test suite.

Provides: fake embedding and generation backends, chunk factories, and a
fully wired orchestrator over in-memory components.
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import asyncio
from collections.abc import Callable

import pytest

from context_rag.boundary.context_repository import InMemoryContextRepository
from context_rag.core.document_processing import DocumentIndex, Embedder
from context_rag.core.rag_query import (
    AnswerSynthesizer,
    ChainedStrategy,
    EmbeddingStrategy,
    KeywordStrategy,
    QuickMatcher,
    RAGOrchestrator,
)
from context_rag.models import ChunkMetadata, ContextRecord, DocumentChunk


class FakeEmbeddingBackend:
    """EmbeddingBackend double returning canned vectors."""

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        error: Exception | None = None,
        delay: float = 0.0,
        name: str = "fake:embeddings",
    ) -> None:
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0, 0.0]
        self.error = error
        self.delay = delay
        self._name = name
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.vectors.get(text, self.default)


class FakeGenerationBackend:
    """GenerationBackend double that records every call."""

    def __init__(
        self,
        response: str = "Generated answer.",
        error: Exception | None = None,
        delay: float = 0.0,
        name: str = "fake:chat",
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self._name = name
        self.calls: list[dict] = []

    @property
    def name(self) -> str:
        return self._name

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_prompt": user_prompt,
            "max_tokens": max_tokens,
            "temperature": temperature,
        })
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def make_chunk() -> Callable[..., DocumentChunk]:
    """
    Factory for DocumentChunk instances.

    Returns:
        Callable: make_chunk(content, filename="doc.txt", context_id=1, index=0, embedding=None)
    """

    def _make(
        content: str,
        filename: str = "doc.txt",
        context_id: int = 1,
        index: int = 0,
        embedding: list[float] | None = None,
    ) -> DocumentChunk:
        return DocumentChunk(
            id=DocumentChunk.make_id(context_id, filename, index),
            content=content,
            embedding=embedding,
            metadata=ChunkMetadata(filename=filename, context_id=context_id, chunk_index=index),
        )

    return _make


@pytest.fixture
def make_embedding_backend() -> type[FakeEmbeddingBackend]:
    """Provide the fake embedding backend class for per-test configuration."""
    return FakeEmbeddingBackend


@pytest.fixture
def make_generation_backend() -> type[FakeGenerationBackend]:
    """Provide the fake generation backend class for per-test configuration."""
    return FakeGenerationBackend


@pytest.fixture
def generation_backend() -> FakeGenerationBackend:
    """Provide a generation backend that answers successfully."""
    return FakeGenerationBackend()


@pytest.fixture
def repository() -> InMemoryContextRepository:
    """Provide a repository with contexts 1 and 2 registered."""
    return InMemoryContextRepository([
        ContextRecord(id=1, name="Equipment", share_point_url="https://example.sharepoint.com/equipment"),
        ContextRecord(id=2, name="Operations"),
    ])


@pytest.fixture
def orchestrator(
    repository: InMemoryContextRepository,
    generation_backend: FakeGenerationBackend,
) -> RAGOrchestrator:
    """
    Provide an orchestrator wired like production with hash-only embeddings.

    Uses the hybrid strategy, default quick-match rules and no batch delay.
    """
    embedder = Embedder(backend=None)
    index = DocumentIndex(embedder=embedder, batch_delay_seconds=0.0)
    return RAGOrchestrator(
        repository=repository,
        index=index,
        strategy=ChainedStrategy(EmbeddingStrategy(embedder), KeywordStrategy()),
        synthesizer=AnswerSynthesizer(backend=generation_backend),
        quick_matcher=QuickMatcher(),
        top_k=3,
    )
