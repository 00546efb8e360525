"""
RAG orchestrator.

Facade over the index, quick-match rules, search strategy and synthesizer.
Each query runs one pass of:

    START -> [unknown context] ContextNotFoundError
          -> [no chunks] EMPTY_CONTEXT
          -> QUICK_MATCH_CHECK -> [hit] QUICK_MATCH
          -> RANK (embeds the query) -> [no results] NO_MATCH
          -> SYNTHESIZE -> ANSWERED
          -> [GenerationFailure] ERROR (retryable)

Dependencies: context_rag.core, context_rag.boundary
System role: Entry point for search and ingestion
"""

import asyncio
import logging

from context_rag.boundary.context_repository import ContextRepository
from context_rag.core.document_processing.document_index import DocumentIndex
from context_rag.core.exceptions import ContextNotFoundError, GenerationFailure, RetrievalError, ValidationError
from context_rag.core.rag_query.quick_match import QuickMatcher
from context_rag.core.rag_query.strategies import SearchStrategy
from context_rag.core.rag_query.synthesizer import AnswerSynthesizer
from context_rag.models.context import ContextRecord
from context_rag.models.search import SearchResponse, SearchResult, SearchStatus, Source

logger = logging.getLogger(__name__)

EMPTY_CONTEXT_MESSAGE = "No documents found in this context. Please upload some documents first."
NO_MATCH_TEMPLATE = (
    'I couldn\'t find information about "{query}" in the uploaded documents. '
    "Try a different search term or check if the relevant documents are uploaded."
)
GENERATION_ERROR_MESSAGE = "Error processing your query. Please try again."

DEFAULT_TOP_K = 3


def build_sources(results: list[SearchResult], context: ContextRecord) -> list[Source]:
    """
    Cite the documents behind ranked results.

    Args:
        results: Ranked results, best first
        context: Context the results belong to

    Returns:
        list[Source]: One source per filename, in order of first use
    """
    seen: set[str] = set()
    sources: list[Source] = []
    for result in results:
        filename = result.chunk.metadata.filename
        if filename in seen:
            continue
        seen.add(filename)
        sources.append(Source(title=filename, url=context.source_url()))
    return sources


class RAGOrchestrator:
    """Per-query search pipeline and ingestion entry point."""

    def __init__(
        self,
        repository: ContextRepository,
        index: DocumentIndex,
        strategy: SearchStrategy,
        synthesizer: AnswerSynthesizer,
        quick_matcher: QuickMatcher | None = None,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        """
        Initialize orchestrator.

        Args:
            repository: Context registry
            index: Document index owned by this orchestrator
            strategy: Ranking strategy
            synthesizer: Answer synthesizer
            quick_matcher: Pattern shortcuts (None disables them)
            top_k: Chunks handed to synthesis
        """
        self.repository = repository
        self.index = index
        self.strategy = strategy
        self.synthesizer = synthesizer
        self.quick_matcher = quick_matcher
        self.top_k = top_k

    def _require_context(self, context_id: int) -> ContextRecord:
        context = self.repository.get(context_id)
        if context is None:
            logger.warning(f"{__name__}:_require_context - Unknown context {context_id}")
            raise ContextNotFoundError(context_id)
        return context

    async def search(self, query: str, context_id: int) -> SearchResponse:
        """
        Answer a query from a context's documents.

        Args:
            query: User question
            context_id: Context to search

        Returns:
            SearchResponse: Answer, cited sources and terminal status

        Raises:
            ValidationError: If the query is blank
            ContextNotFoundError: If the context is not registered
        """
        if not query or not query.strip():
            raise ValidationError("Query cannot be empty", field="query")
        query = query.strip()

        context = self._require_context(context_id)

        chunks = self.index.chunks_for(context_id)
        if not chunks:
            logger.info(f"{__name__}:search - Context {context_id} has no chunks")
            return SearchResponse(response=EMPTY_CONTEXT_MESSAGE, status=SearchStatus.EMPTY_CONTEXT)

        if self.quick_matcher is not None:
            quick = self.quick_matcher.match(query, chunks)
            if quick is not None:
                logger.info(f"{__name__}:search - Quick match '{quick.rule}' for context {context_id}")
                return SearchResponse(
                    response=quick.answer,
                    sources=[Source(title=quick.chunk.metadata.filename, url=context.source_url())],
                    status=SearchStatus.QUICK_MATCH,
                )

        try:
            ranked = await self.strategy.rank(query, chunks, self.top_k)
        except RetrievalError as e:
            logger.warning(f"{__name__}:search - Ranking failed, treating as no match: {e}")
            ranked = []

        if not ranked:
            logger.info(f"{__name__}:search - No relevant chunks in context {context_id}")
            return SearchResponse(
                response=NO_MATCH_TEMPLATE.format(query=query),
                status=SearchStatus.NO_MATCH,
            )

        logger.info(
            f"{__name__}:search - Ranked {len(ranked)} chunks with {ranked[0].strategy} "
            f"(top score {ranked[0].score:.3f})"
        )
        sources = build_sources(ranked, context)

        try:
            answer = await self.synthesizer.generate(query, ranked)
        except GenerationFailure as e:
            logger.error(f"{__name__}:search - Generation failed for context {context_id}: {e}")
            return SearchResponse(
                response=GENERATION_ERROR_MESSAGE,
                sources=[],
                status=SearchStatus.ERROR,
                retryable=True,
            )

        return SearchResponse(response=answer, sources=sources, status=SearchStatus.ANSWERED)

    async def ingest(self, context_id: int, filename: str, content: str) -> int:
        """
        Index a document's text under a context.

        Args:
            context_id: Target context
            filename: Source filename; re-ingesting replaces its chunks
            content: Extracted text

        Returns:
            int: Chunks indexed

        Raises:
            ValidationError: If the filename is blank
            ContextNotFoundError: If the context is not registered
        """
        if not filename or not filename.strip():
            raise ValidationError("Filename cannot be empty", field="filename")
        self._require_context(context_id)
        return await self.index.add_document(context_id, filename, content)

    async def ingest_many(self, context_id: int, documents: dict[str, str]) -> dict[str, int]:
        """
        Index several documents concurrently.

        Args:
            context_id: Target context
            documents: Mapping of filename to extracted text

        Returns:
            dict[str, int]: Chunks indexed per filename
        """
        self._require_context(context_id)
        filenames = list(documents)
        counts = await asyncio.gather(
            *(self.ingest(context_id, name, documents[name]) for name in filenames)
        )
        return dict(zip(filenames, counts))

    def clear_context(self, context_id: int) -> None:
        """Drop a context's indexed documents."""
        self.index.clear_context(context_id)

    def document_count(self, context_id: int) -> int:
        """Number of distinct documents indexed for a context."""
        return self.index.document_count(context_id)

    def reset(self) -> None:
        """Drop every indexed document."""
        self.index.reset()

    async def suggest_follow_ups(self, query: str, answer: str, count: int = 3) -> list[str]:
        """Suggest follow-up questions; empty when unavailable."""
        return await self.synthesizer.suggest_follow_ups(query, answer, count=count)
