"""
Search domain models and schemas.

Ranking results, the answer returned to callers, and HTTP request/response
contracts for the search and ingestion endpoints.

Dependencies: pydantic
System role: Search API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from context_rag.models.chunk import DocumentChunk


class SearchResult(BaseModel):
    """Single ranked chunk. Scores are not comparable across strategies."""

    chunk: DocumentChunk
    score: float = Field(description="Cosine similarity or keyword score")
    strategy: str = Field(description="Name of the strategy that produced the score")


class SearchStatus(str, Enum):
    """Terminal state of a search."""

    ANSWERED = "answered"
    QUICK_MATCH = "quick_match"
    EMPTY_CONTEXT = "empty_context"
    NO_MATCH = "no_match"
    ERROR = "error"


class Source(BaseModel):
    """Cited source document."""

    title: str = Field(description="Document filename")
    url: str = Field(description="Document library URL for the context")


class SearchResponse(BaseModel):
    """Answer returned for a query."""

    response: str = Field(description="Answer text shown to the user")
    sources: list[Source] = Field(default_factory=list)
    status: SearchStatus
    retryable: bool = Field(
        default=False,
        description="True when the failure was transient and the query may be retried",
    )


class SearchRequest(BaseModel):
    """Request schema for context search."""

    query: str = Field(description="User question")


class IngestRequest(BaseModel):
    """Request schema for adding a document's extracted text to a context."""

    filename: str = Field(min_length=1, description="Source document filename")
    content: str = Field(description="Extracted document text")


class IngestResponse(BaseModel):
    """Response schema for document ingestion."""

    context_id: int
    filename: str
    chunk_count: int = Field(description="Chunks indexed for this document")
    document_count: int = Field(description="Distinct documents now indexed for the context")


class DocumentCountResponse(BaseModel):
    """Response schema for the document count endpoint."""

    context_id: int
    document_count: int


class SuggestionRequest(BaseModel):
    """Request schema for follow-up question suggestions."""

    query: str
    answer: str


class SuggestionResponse(BaseModel):
    """Response schema for follow-up question suggestions."""

    suggestions: list[str] = Field(default_factory=list)
