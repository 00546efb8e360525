"""
Embedding backend configuration settings.

Selects the external embedding provider and bounds every call to it.
The hash fallback settings apply when the provider is missing or failing.

Dependencies: pydantic, pydantic_settings
System role: Embedding configuration for chunk and query vectors
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingSettings(BaseSettings):
    """Embedding provider configuration (Gemini, OpenAI, or hash fallback only)."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: Literal["google", "openai", "none"] = Field(
        default="none",
        description="Embedding provider: 'google', 'openai', or 'none' for hash fallback only",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Provider model ID (e.g. text-embedding-3-small for OpenAI)",
    )
    dimension: int = Field(
        default=1024,
        description="Output dimension requested from providers that support it",
    )
    api_key: str | None = Field(
        default=None,
        description="Provider API key (falls back to the provider's own env var)",
    )
    timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single embedding call",
    )
    max_input_chars: int = Field(
        default=8000,
        gt=0,
        description="Input is truncated to this many characters before embedding",
    )
    fallback_enabled: bool = Field(
        default=True,
        description="Use the deterministic hash embedding when the provider fails",
    )
    fallback_dimension: int = Field(
        default=384,
        gt=0,
        description="Dimension of hash fallback vectors",
    )
