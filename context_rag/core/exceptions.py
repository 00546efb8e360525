"""
Exception hierarchy for the context RAG service.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ContextRAGException(Exception):
    """Base exception for all context RAG errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ContextRAGException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ContextNotFoundError(ContextRAGException):
    """Raised when a context ID is unknown to the context registry."""

    def __init__(self, context_id: int, details: dict[str, Any] | None = None) -> None:
        """
        Initialize context not found error.

        Args:
            context_id: ID of the missing context
            details: Additional context
        """
        details = details or {}
        details["context_id"] = context_id
        self.context_id = context_id
        super().__init__(f"Context not found: {context_id}", details)


class DocumentProcessingError(ContextRAGException):
    """Base exception for document processing errors."""

    def __init__(
        self,
        message: str,
        filename: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message
            filename: Name of the document that failed
            details: Additional context
        """
        details = details or {}
        if filename:
            details["filename"] = filename
        super().__init__(message, details)


class EmbeddingError(DocumentProcessingError):
    """Raised when embedding generation fails and no fallback is configured."""

    pass


class RetrievalError(ContextRAGException):
    """Raised when ranking a context's chunks fails."""

    def __init__(
        self,
        message: str,
        strategy: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            strategy: Name of the strategy that failed
            details: Additional context
        """
        details = details or {}
        if strategy:
            details["strategy"] = strategy
        super().__init__(message, details)


class GenerationFailure(ContextRAGException):
    """Raised when the generation backend errors, times out, or returns nothing.

    Safe for the caller to retry.
    """

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation failure.

        Args:
            message: Error message
            provider: Generation backend that failed
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        super().__init__(message, details)
