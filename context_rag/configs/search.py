"""
Search pipeline configuration settings.

Chunking, ranking, context budget and ingestion throttling parameters.
Chunk size and top-k are both exposed so deployments can tune them.

Dependencies: pydantic, pydantic_settings, context_rag.models
System role: Retrieval configuration for the RAG orchestrator
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from context_rag.models.context import ContextRecord


class SearchSettings(BaseSettings):
    """Retrieval pipeline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    strategy: Literal["embedding", "keyword", "hybrid"] = Field(
        default="hybrid",
        description="Ranking strategy; 'hybrid' ranks by embedding and falls back to keywords",
    )
    chunk_size: int = Field(
        default=1000,
        ge=50,
        description="Target maximum chunk size in characters",
    )
    top_k: int = Field(
        default=3,
        ge=1,
        le=50,
        description="Number of chunks handed to answer synthesis",
    )
    keyword_top_k: int = Field(
        default=3,
        ge=1,
        le=50,
        description="Number of chunks returned by keyword ranking",
    )
    similarity_threshold: float = Field(
        default=0.0,
        ge=-1.0,
        le=1.0,
        description="Embedding results scoring at or below this are discarded",
    )
    context_char_budget: int = Field(
        default=2000,
        gt=0,
        description="Maximum characters of document context sent to the chat model",
    )
    quick_match_enabled: bool = Field(
        default=True,
        description="Answer common factual queries by pattern before ranking",
    )
    ingest_batch_size: int = Field(
        default=3,
        ge=1,
        description="Concurrent embedding calls per file during ingestion",
    )
    ingest_batch_delay_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause between embedding batches to respect provider rate limits",
    )
    seed_contexts: list[ContextRecord] = Field(
        default_factory=lambda: [ContextRecord(id=1, name="Default")],
        description="Contexts registered in the in-memory repository at startup",
    )
