"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from context_rag.configs.embedding import EmbeddingSettings
from context_rag.configs.generation import GenerationSettings
from context_rag.configs.search import SearchSettings
from context_rag.configs.settings import Settings, get_settings

__all__ = [
    "EmbeddingSettings",
    "GenerationSettings",
    "SearchSettings",
    "Settings",
    "get_settings",
]
