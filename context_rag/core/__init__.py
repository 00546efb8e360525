"""
Core business logic module.

Contains the exception hierarchy, document processing and the RAG query
pipeline. All retrieval rules and domain-specific logic reside here.
"""

from context_rag.core.exceptions import (
    ContextNotFoundError,
    ContextRAGException,
    DocumentProcessingError,
    EmbeddingError,
    GenerationFailure,
    RetrievalError,
    ValidationError,
)

__all__ = [
    "ContextNotFoundError",
    "ContextRAGException",
    "DocumentProcessingError",
    "EmbeddingError",
    "GenerationFailure",
    "RetrievalError",
    "ValidationError",
]
