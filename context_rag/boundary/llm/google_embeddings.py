"""
Gemini embeddings pinned to one vector length.

GoogleGenerativeAIEmbeddings accepts output_dimensionality per call but not
as a constructor default. Every chunk and query vector of a context must share
one length for cosine ranking, so this subclass injects the configured length
on every query call.

Imported lazily by the backend factory so langchain_google_genai is only
needed when EMBEDDING_PROVIDER=google.

Dependencies: langchain_google_genai
System role: Google embedding client for the embedding backend
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "models/gemini-embedding-001"
DEFAULT_DIMENSION = 768


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """Gemini embeddings client that always requests the same dimension."""

    _output_dimensionality: int = DEFAULT_DIMENSION

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        output_dimensionality: int = DEFAULT_DIMENSION,
        **kwargs,
    ) -> None:
        """
        Args:
            model: Gemini embedding model ID
            output_dimensionality: Vector length requested on every call
            **kwargs: Passed through to GoogleGenerativeAIEmbeddings (api key, ...)
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(f"{__name__}:__init__ - Gemini embeddings {model} pinned to {output_dimensionality} dims")

    def _query_kwargs(self, task_type: str | None, title: str | None) -> dict:
        return {
            "task_type": task_type,
            "title": title,
            "output_dimensionality": self._output_dimensionality,
        }

    def embed_query(self, text: str, task_type: str | None = None, title: str | None = None, **_) -> list[float]:
        return super().embed_query(text, **self._query_kwargs(task_type, title))

    async def aembed_query(
        self, text: str, task_type: str | None = None, title: str | None = None, **_
    ) -> list[float]:
        vector = await super().aembed_query(text, **self._query_kwargs(task_type, title))
        if len(vector) != self._output_dimensionality:
            logger.warning(
                f"{__name__}:aembed_query - Expected {self._output_dimensionality} dims, got {len(vector)}"
            )
        return vector
