"""
Document processing for ingestion.

Chunking, embedding with hash fallback, and the in-memory per-context index.

Dependencies: numpy, context_rag.boundary.llm, context_rag.models
System role: Document ingestion pipeline
"""

from .chunker import MIN_CHUNK_CHARS, SentenceChunker
from .document_index import DocumentIndex
from .embedder import Embedder, EmbeddingResult, hash_embedding, string_hash

__all__ = [
    "MIN_CHUNK_CHARS",
    "DocumentIndex",
    "Embedder",
    "EmbeddingResult",
    "SentenceChunker",
    "hash_embedding",
    "string_hash",
]
