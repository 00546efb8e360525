"""
Query and chunk embedder with deterministic fallback.

Calls the configured embedding backend under a timeout. When the backend is
missing, fails, times out or returns an empty vector, a hashed bag-of-words
vector is produced instead, so embedding never blocks ingestion or search.

Dependencies: numpy, context_rag.boundary.llm, context_rag.core.exceptions
System role: Embedding generation with graceful degradation
"""

import asyncio
import logging
import math
import re
from typing import NamedTuple

import numpy as np

from context_rag.boundary.llm.base import EmbeddingBackend
from context_rag.core.exceptions import EmbeddingError
from context_rag.models.chunk import EmbeddingSource

logger = logging.getLogger(__name__)

FALLBACK_DIMENSION = 384
MAX_INPUT_CHARS = 8000
DEFAULT_TIMEOUT_SECONDS = 10.0

# JavaScript-style \W (ASCII), so tokens match across platforms
_NON_WORD = re.compile(r"\W+", re.ASCII)
_MIN_TOKEN_LENGTH = 3


def string_hash(value: str) -> int:
    """
    Polynomial string hash wrapped to a signed 32-bit integer.

    Iterates UTF-16 code units with ``h = h * 31 + c``, matching the classic
    ``(h << 5) - h + c`` hash so fallback vectors are stable everywhere.

    Args:
        value: String to hash

    Returns:
        int: Hash in [-2**31, 2**31 - 1]
    """
    encoded = value.encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        h = (h * 31 + code_unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def tokenize(text: str) -> list[str]:
    """Lowercase text and split on non-word characters, keeping tokens of 3+ chars."""
    return [token for token in _NON_WORD.split(text.lower()) if len(token) >= _MIN_TOKEN_LENGTH]


def hash_embedding(text: str, dimension: int = FALLBACK_DIMENSION) -> list[float]:
    """
    Deterministic bag-of-hashed-words embedding.

    Each token adds ``1/sqrt(token_count)`` to bucket ``abs(hash) % dimension``;
    the result is L2-normalised. Text without tokens yields the zero vector.

    Args:
        text: Input text
        dimension: Vector length

    Returns:
        list[float]: Unit-length vector, or all zeros when there are no tokens
    """
    tokens = tokenize(text)
    vector = np.zeros(dimension, dtype=np.float64)
    if not tokens:
        return vector.tolist()

    weight = 1.0 / math.sqrt(len(tokens))
    for token in tokens:
        vector[abs(string_hash(token)) % dimension] += weight

    norm = float(np.linalg.norm(vector))
    if norm > 0:
        vector /= norm
    return vector.tolist()


class EmbeddingResult(NamedTuple):
    """Embedding vector with the path that produced it."""

    vector: list[float]
    source: EmbeddingSource


class Embedder:
    """Embedding generator with backend timeout and hash fallback."""

    def __init__(
        self,
        backend: EmbeddingBackend | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_input_chars: int = MAX_INPUT_CHARS,
        fallback_enabled: bool = True,
        fallback_dimension: int = FALLBACK_DIMENSION,
    ) -> None:
        """
        Initialize embedder.

        Args:
            backend: External embedding backend (None for fallback only)
            timeout_seconds: Upper bound for one backend call
            max_input_chars: Input truncation limit
            fallback_enabled: Use hash embedding on backend failure
            fallback_dimension: Hash embedding vector length
        """
        self._backend = backend
        self._timeout_seconds = timeout_seconds
        self._max_input_chars = max_input_chars
        self._fallback_enabled = fallback_enabled
        self._fallback_dimension = fallback_dimension

    @property
    def backend(self) -> EmbeddingBackend | None:
        """Configured embedding backend."""
        return self._backend

    async def embed(self, text: str) -> list[float]:
        """
        Embed text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Embedding vector

        Raises:
            EmbeddingError: Backend failed and fallback is disabled
        """
        result = await self.embed_with_source(text)
        return result.vector

    async def embed_with_source(self, text: str) -> EmbeddingResult:
        """
        Embed text, reporting whether the fallback path was used.

        Args:
            text: Text to embed

        Returns:
            EmbeddingResult: Vector and its source ("backend" or "fallback")

        Raises:
            EmbeddingError: Backend failed and fallback is disabled
        """
        truncated = text[: self._max_input_chars]

        if self._backend is None:
            return self._fallback(truncated, reason="no embedding backend configured")

        try:
            vector = await asyncio.wait_for(
                self._backend.embed(truncated),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError:
            return self._fallback(
                truncated,
                reason=f"{self._backend.name} timed out after {self._timeout_seconds}s",
            )
        except Exception as e:
            return self._fallback(
                truncated,
                reason=f"{self._backend.name} failed: {type(e).__name__}: {e}",
                cause=e,
            )

        if not vector:
            return self._fallback(truncated, reason=f"{self._backend.name} returned an empty vector")

        return EmbeddingResult(vector=list(vector), source="backend")

    def _fallback(self, text: str, reason: str, cause: Exception | None = None) -> EmbeddingResult:
        """Produce the hash embedding, or raise when fallback is disabled."""
        if not self._fallback_enabled:
            logger.error(f"{__name__}:embed - Embedding failed with fallback disabled: {reason}")
            raise EmbeddingError(f"Embedding failed: {reason}") from cause

        logger.warning(f"{__name__}:embed - Degraded to hash embedding: {reason}")
        return EmbeddingResult(
            vector=hash_embedding(text, self._fallback_dimension),
            source="fallback",
        )
