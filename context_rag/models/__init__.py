"""Domain models and API schemas."""

from context_rag.models.chunk import ChunkMetadata, DocumentChunk, EmbeddingSource
from context_rag.models.context import ContextRecord
from context_rag.models.search import (
    DocumentCountResponse,
    IngestRequest,
    IngestResponse,
    SearchRequest,
    SearchResponse,
    SearchResult,
    SearchStatus,
    Source,
    SuggestionRequest,
    SuggestionResponse,
)

__all__ = [
    "ChunkMetadata",
    "ContextRecord",
    "DocumentChunk",
    "DocumentCountResponse",
    "EmbeddingSource",
    "IngestRequest",
    "IngestResponse",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "SearchStatus",
    "Source",
    "SuggestionRequest",
    "SuggestionResponse",
]
