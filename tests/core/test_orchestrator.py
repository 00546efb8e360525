"""Tests for the RAG orchestrator query state machine and ingestion."""

import pytest

from context_rag.core.exceptions import ContextNotFoundError, ValidationError
from context_rag.core.rag_query.orchestrator import (
    EMPTY_CONTEXT_MESSAGE,
    GENERATION_ERROR_MESSAGE,
    RAGOrchestrator,
)
from context_rag.core.rag_query.synthesizer import AnswerSynthesizer
from context_rag.models.search import SearchStatus, Source

MANUAL = "Manufacturer - Acme Corp. Model - X200. Horsepower rating is 50 hp."
PUMPS = "Centrifugal pumps move water through the treatment plant every day."
SAFETY = "Operators must wear gloves and goggles near chemical storage tanks."


class TestSearchScenarios:
    """End-to-end search behaviour over real chunking and hash embeddings."""

    @pytest.mark.asyncio
    async def test_quick_match_skips_generation(
        self, orchestrator: RAGOrchestrator, generation_backend
    ) -> None:
        """Should answer the manufacturer question by pattern without generation."""
        await orchestrator.ingest(1, "manual.txt", MANUAL)

        response = await orchestrator.search("Who is the manufacturer?", 1)

        assert response.status == SearchStatus.QUICK_MATCH
        assert "Acme Corp" in response.response
        assert response.sources == [
            Source(title="manual.txt", url="https://example.sharepoint.com/equipment")
        ]
        assert generation_backend.calls == []

    @pytest.mark.asyncio
    async def test_nonsense_query_finds_nothing(
        self, orchestrator: RAGOrchestrator, generation_backend
    ) -> None:
        """Should return the no-match message when nothing relates to the query."""
        await orchestrator.ingest(2, "pumps.txt", PUMPS)
        await orchestrator.ingest(2, "safety.txt", SAFETY)

        response = await orchestrator.search("unrelated nonsense query zzz", 2)

        assert response.status == SearchStatus.NO_MATCH
        assert response.response.startswith(
            'I couldn\'t find information about "unrelated nonsense query zzz"'
        )
        assert response.sources == []
        assert generation_backend.calls == []

    @pytest.mark.asyncio
    async def test_answer_cites_ranked_sources(
        self, orchestrator: RAGOrchestrator, generation_backend
    ) -> None:
        """Should synthesize from ranked chunks and cite their files."""
        await orchestrator.ingest(2, "pumps.txt", PUMPS)
        await orchestrator.ingest(2, "safety.txt", SAFETY)

        response = await orchestrator.search("What do the pumps move", 2)

        assert response.status == SearchStatus.ANSWERED
        assert response.response == "Generated answer."
        assert response.sources == [Source(title="pumps.txt", url="uploaded-files-2")]
        assert "From pumps.txt:" in generation_backend.calls[0]["user_prompt"]

    @pytest.mark.asyncio
    async def test_empty_context(self, orchestrator: RAGOrchestrator, generation_backend) -> None:
        """Should return the no-documents message for a context without chunks."""
        response = await orchestrator.search("Who is the manufacturer?", 2)

        assert response.status == SearchStatus.EMPTY_CONTEXT
        assert response.response == EMPTY_CONTEXT_MESSAGE
        assert generation_backend.calls == []

    @pytest.mark.asyncio
    async def test_contexts_are_isolated(self, orchestrator: RAGOrchestrator) -> None:
        """Should never answer from another context's documents."""
        await orchestrator.ingest(1, "manual.txt", MANUAL)
        await orchestrator.ingest(2, "pumps.txt", PUMPS)

        own = await orchestrator.search("Who is the manufacturer?", 1)
        other = await orchestrator.search("Who is the manufacturer?", 2)
        pumps = await orchestrator.search("What do the pumps move", 2)

        assert own.status == SearchStatus.QUICK_MATCH
        assert other.status != SearchStatus.QUICK_MATCH
        assert "Acme" not in other.response
        assert all(source.title != "manual.txt" for source in other.sources + pumps.sources)
        assert [source.title for source in pumps.sources] == ["pumps.txt"]

    @pytest.mark.asyncio
    async def test_generation_failure_is_retryable(
        self, orchestrator: RAGOrchestrator, make_generation_backend
    ) -> None:
        """Should convert generation failures into a retryable error response."""
        orchestrator.synthesizer = AnswerSynthesizer(
            backend=make_generation_backend(error=RuntimeError("rate limited"))
        )
        await orchestrator.ingest(2, "pumps.txt", PUMPS)

        response = await orchestrator.search("What do the pumps move", 2)

        assert response.status == SearchStatus.ERROR
        assert response.retryable is True
        assert response.response == GENERATION_ERROR_MESSAGE


class TestSearchValidation:
    """Test rejected searches."""

    @pytest.mark.asyncio
    async def test_unknown_context(self, orchestrator: RAGOrchestrator) -> None:
        """Should raise ContextNotFoundError for unregistered contexts."""
        with pytest.raises(ContextNotFoundError) as exc_info:
            await orchestrator.search("anything", 99)

        assert exc_info.value.context_id == 99

    @pytest.mark.asyncio
    async def test_blank_query(self, orchestrator: RAGOrchestrator) -> None:
        """Should raise ValidationError for a blank query."""
        with pytest.raises(ValidationError):
            await orchestrator.search("   ", 1)


class TestIngestion:
    """Test ingestion and index maintenance through the orchestrator."""

    @pytest.mark.asyncio
    async def test_ingest_unknown_context(self, orchestrator: RAGOrchestrator) -> None:
        """Should refuse to index into an unregistered context."""
        with pytest.raises(ContextNotFoundError):
            await orchestrator.ingest(99, "manual.txt", MANUAL)

    @pytest.mark.asyncio
    async def test_ingest_many(self, orchestrator: RAGOrchestrator) -> None:
        """Should index several files and report chunks per file."""
        counts = await orchestrator.ingest_many(2, {"pumps.txt": PUMPS, "safety.txt": SAFETY, "tiny.txt": "x"})

        assert counts == {"pumps.txt": 1, "safety.txt": 1, "tiny.txt": 0}
        assert orchestrator.document_count(2) == 2

    @pytest.mark.asyncio
    async def test_clear_and_reset(self, orchestrator: RAGOrchestrator) -> None:
        """Should drop documents on clear_context and reset."""
        await orchestrator.ingest(1, "manual.txt", MANUAL)
        await orchestrator.ingest(2, "pumps.txt", PUMPS)

        orchestrator.clear_context(1)
        assert orchestrator.document_count(1) == 0
        assert orchestrator.document_count(2) == 1

        orchestrator.reset()
        assert orchestrator.document_count(2) == 0

    @pytest.mark.asyncio
    async def test_suggest_follow_ups_delegates(
        self, orchestrator: RAGOrchestrator, make_generation_backend
    ) -> None:
        """Should return the synthesizer's suggestions."""
        orchestrator.synthesizer = AnswerSynthesizer(
            backend=make_generation_backend(response='["What is the model?"]')
        )

        assert await orchestrator.suggest_follow_ups("q", "a") == ["What is the model?"]
