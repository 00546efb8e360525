"""
Model provider boundary layer.

- EmbeddingBackend / GenerationBackend: protocols consumed by the core
- LangChain adapters for Google Generative AI and OpenAI
- Factories selecting the provider from settings
"""

from context_rag.boundary.llm.base import EmbeddingBackend, GenerationBackend
from context_rag.boundary.llm.factory import build_embedding_backend, build_generation_backend

__all__ = [
    "EmbeddingBackend",
    "GenerationBackend",
    "build_embedding_backend",
    "build_generation_backend",
]
