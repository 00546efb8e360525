"""
Chunk domain model.

Represents an indexed document chunk with deterministic ID and embedding.

Dependencies: pydantic
System role: Document chunk data structure
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EmbeddingSource = Literal["backend", "fallback"]


class ChunkMetadata(BaseModel):
    """Position of a chunk within its source document."""

    model_config = ConfigDict(frozen=True)

    filename: str = Field(description="Source document filename")
    context_id: int = Field(description="Owning context ID")
    chunk_index: int = Field(ge=0, description="0-based position within the file")


class DocumentChunk(BaseModel):
    """Indexed document chunk."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Identifier unique within a context: {context_id}_{filename}_{index}")
    content: str = Field(description="Chunk text content")
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
    embedding_source: EmbeddingSource = Field(
        default="backend",
        description="Whether the vector came from the provider or the hash fallback",
    )
    metadata: ChunkMetadata

    @staticmethod
    def make_id(context_id: int, filename: str, chunk_index: int) -> str:
        """Build the deterministic chunk identifier."""
        return f"{context_id}_{filename}_{chunk_index}"
