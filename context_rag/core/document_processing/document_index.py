"""
In-memory per-context document index.

Holds the embedded chunks of every context as an immutable tuple that is
replaced wholesale on each mutation. Readers take the current tuple without
locking and always see either none or all of a document's chunks.

Dependencies: context_rag.core.document_processing, context_rag.models
System role: Chunk storage for retrieval
"""

import asyncio
import logging
import threading

from context_rag.core.document_processing.chunker import SentenceChunker
from context_rag.core.document_processing.embedder import Embedder
from context_rag.core.exceptions import EmbeddingError
from context_rag.models.chunk import ChunkMetadata, DocumentChunk

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 3
DEFAULT_BATCH_DELAY_SECONDS = 0.1


class DocumentIndex:
    """Snapshot-swapped chunk index keyed by context ID."""

    def __init__(
        self,
        embedder: Embedder,
        chunker: SentenceChunker | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay_seconds: float = DEFAULT_BATCH_DELAY_SECONDS,
    ) -> None:
        """
        Initialize document index.

        Args:
            embedder: Embedder used for every chunk
            chunker: Chunker used for incoming documents
            batch_size: Concurrent embedding calls per batch
            batch_delay_seconds: Pause between batches
        """
        self._embedder = embedder
        self._chunker = chunker or SentenceChunker()
        self._batch_size = max(1, batch_size)
        self._batch_delay_seconds = batch_delay_seconds
        self._snapshots: dict[int, tuple[DocumentChunk, ...]] = {}
        self._lock = threading.Lock()
        # Bumped by clear_context and reset; an ingest that started earlier is discarded
        self._generations: dict[int, int] = {}
        self._epoch = 0

    async def add_document(self, context_id: int, filename: str, content: str) -> int:
        """
        Chunk, embed and index a document.

        Chunks whose embedding raises are skipped. Earlier chunks for the
        same filename are replaced in the same swap.

        Args:
            context_id: Target context
            filename: Source document filename
            content: Extracted document text

        Returns:
            int: Number of chunks indexed for this document
        """
        started = self._generation(context_id)
        pieces = self._chunker.chunk_document(content)
        if not pieces:
            logger.info(
                f"{__name__}:add_document - {filename} produced no chunks for context {context_id}"
            )
            return 0

        chunks: list[DocumentChunk] = []
        for start in range(0, len(pieces), self._batch_size):
            if start > 0 and self._batch_delay_seconds > 0:
                await asyncio.sleep(self._batch_delay_seconds)
            batch = pieces[start:start + self._batch_size]
            embedded = await asyncio.gather(
                *(self._embed_chunk(context_id, filename, index, text) for index, text in batch)
            )
            chunks.extend(chunk for chunk in embedded if chunk is not None)

        if not chunks:
            logger.warning(
                f"{__name__}:add_document - No chunks of {filename} could be embedded "
                f"for context {context_id}"
            )
            return 0

        with self._lock:
            stale = self._generation(context_id) != started
            if not stale:
                current = self._snapshots.get(context_id, ())
                kept = tuple(chunk for chunk in current if chunk.metadata.filename != filename)
                self._snapshots[context_id] = kept + tuple(chunks)

        if stale:
            logger.warning(
                f"{__name__}:add_document - Context {context_id} was cleared while {filename} "
                f"was embedding; discarded {len(chunks)} chunks"
            )
            return 0

        degraded = sum(1 for chunk in chunks if chunk.embedding_source == "fallback")
        logger.info(
            f"{__name__}:add_document - Indexed {len(chunks)}/{len(pieces)} chunks of "
            f"{filename} in context {context_id} ({degraded} hash-embedded)"
        )
        return len(chunks)

    def _generation(self, context_id: int) -> tuple[int, int]:
        return self._epoch, self._generations.get(context_id, 0)

    async def _embed_chunk(
        self, context_id: int, filename: str, chunk_index: int, text: str
    ) -> DocumentChunk | None:
        """Embed one chunk; returns None when embedding fails."""
        try:
            result = await self._embedder.embed_with_source(text)
        except EmbeddingError as e:
            logger.error(
                f"{__name__}:_embed_chunk - Skipping chunk {chunk_index} of {filename}: {e}"
            )
            return None

        return DocumentChunk(
            id=DocumentChunk.make_id(context_id, filename, chunk_index),
            content=text,
            embedding=result.vector,
            embedding_source=result.source,
            metadata=ChunkMetadata(
                filename=filename,
                context_id=context_id,
                chunk_index=chunk_index,
            ),
        )

    def clear_context(self, context_id: int) -> None:
        """Drop all chunks of a context."""
        with self._lock:
            removed = self._snapshots.pop(context_id, ())
            self._generations[context_id] = self._generations.get(context_id, 0) + 1
        logger.info(f"{__name__}:clear_context - Removed {len(removed)} chunks from context {context_id}")

    def reset(self) -> None:
        """Drop every context."""
        with self._lock:
            self._snapshots = {}
            self._generations = {}
            self._epoch += 1
        logger.info(f"{__name__}:reset - Index cleared")

    def chunks_for(self, context_id: int) -> list[DocumentChunk]:
        """Current chunks of a context in insertion order."""
        return list(self._snapshots.get(context_id, ()))

    def chunk_count(self, context_id: int) -> int:
        """Number of chunks indexed for a context."""
        return len(self._snapshots.get(context_id, ()))

    def document_count(self, context_id: int) -> int:
        """Number of distinct filenames with at least one indexed chunk."""
        return len({chunk.metadata.filename for chunk in self._snapshots.get(context_id, ())})

    def context_ids(self) -> list[int]:
        """Context IDs that currently hold chunks."""
        return sorted(self._snapshots)
