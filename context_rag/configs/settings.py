"""
Application settings root.

Nests the embedding, generation and search sections under the process
settings so the whole configuration travels as one object through the
service cache.

Dependencies: pydantic, context_rag.configs
System role: Single configuration object handed to the service cache
"""

from functools import lru_cache

from pydantic import Field

from context_rag.configs.base import BaseSettings
from context_rag.configs.embedding import EmbeddingSettings
from context_rag.configs.generation import GenerationSettings
from context_rag.configs.search import SearchSettings


class Settings(BaseSettings):
    """Process settings plus one nested section per pipeline concern."""

    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Load settings from the environment once per process.

    Tests that change environment variables call get_settings.cache_clear()
    or construct Settings() directly.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()
