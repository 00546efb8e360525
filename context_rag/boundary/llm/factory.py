"""
Backend factories for selecting embedding and generation providers.

Depends on EMBEDDING_PROVIDER and GENERATION_PROVIDER settings. Provider
packages are imported lazily so only the selected one must be installed.

Dependencies: context_rag.boundary.llm, context_rag.configs
System role: Model provider instantiation and selection
"""

import logging

from context_rag.boundary.llm.base import EmbeddingBackend, GenerationBackend
from context_rag.boundary.llm.embedding_backend import LangChainEmbeddingBackend
from context_rag.boundary.llm.generation_backend import LangChainGenerationBackend
from context_rag.configs import EmbeddingSettings, GenerationSettings

logger = logging.getLogger(__name__)


def build_embedding_backend(settings: EmbeddingSettings) -> EmbeddingBackend | None:
    """
    Build the configured embedding backend.

    Args:
        settings: Embedding settings

    Returns:
        EmbeddingBackend | None: Backend, or None when provider is 'none'

    Raises:
        ValueError: If the provider is unknown
    """
    provider = settings.provider.lower()
    name = f"{provider}:{settings.model}"

    if provider == "none":
        logger.info(f"{__name__}:build_embedding_backend - No embedding provider, hash fallback only")
        return None

    if provider == "google":
        from context_rag.boundary.llm.google_embeddings import FixedDimensionEmbeddings

        kwargs = {"google_api_key": settings.api_key} if settings.api_key else {}
        embeddings = FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            **kwargs,
        )
    elif provider == "openai":
        from langchain_openai import OpenAIEmbeddings

        kwargs = {"api_key": settings.api_key} if settings.api_key else {}
        embeddings = OpenAIEmbeddings(model=settings.model, **kwargs)
    else:
        raise ValueError(
            f"Invalid EMBEDDING_PROVIDER: {provider}. Must be 'google', 'openai' or 'none'."
        )

    logger.info(f"{__name__}:build_embedding_backend - Created embedding backend {name}")
    return LangChainEmbeddingBackend(embeddings, name=name)


def build_generation_backend(settings: GenerationSettings) -> GenerationBackend | None:
    """
    Build the configured generation backend.

    Args:
        settings: Generation settings

    Returns:
        GenerationBackend | None: Backend, or None when provider is 'none'

    Raises:
        ValueError: If the provider is unknown
    """
    provider = settings.provider.lower()
    name = f"{provider}:{settings.model}"

    if provider == "none":
        logger.info(f"{__name__}:build_generation_backend - No chat provider, extractive answers only")
        return None

    if provider == "google":
        from langchain_google_genai import ChatGoogleGenerativeAI

        def factory(temperature: float, max_tokens: int):
            kwargs = {"google_api_key": settings.api_key} if settings.api_key else {}
            return ChatGoogleGenerativeAI(
                model=settings.model,
                temperature=temperature,
                max_output_tokens=max_tokens,
                **kwargs,
            )
    elif provider == "openai":
        from langchain_openai import ChatOpenAI

        def factory(temperature: float, max_tokens: int):
            kwargs = {"api_key": settings.api_key} if settings.api_key else {}
            return ChatOpenAI(
                model=settings.model,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            )
    else:
        raise ValueError(
            f"Invalid GENERATION_PROVIDER: {provider}. Must be 'google', 'openai' or 'none'."
        )

    logger.info(f"{__name__}:build_generation_backend - Created generation backend {name}")
    return LangChainGenerationBackend(factory, name=name)
