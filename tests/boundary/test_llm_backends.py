"""Tests for LangChain provider adapters and backend factories."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from context_rag.boundary.llm import build_embedding_backend, build_generation_backend
from context_rag.boundary.llm.base import EmbeddingBackend, GenerationBackend
from context_rag.boundary.llm.embedding_backend import LangChainEmbeddingBackend
from context_rag.boundary.llm.generation_backend import LangChainGenerationBackend, message_text
from context_rag.configs import EmbeddingSettings, GenerationSettings


class TestLangChainEmbeddingBackend:
    """Test the embeddings adapter."""

    @pytest.mark.asyncio
    async def test_embed_returns_floats(self) -> None:
        """Should await aembed_query and coerce values to float."""
        embeddings = MagicMock()
        embeddings.aembed_query = AsyncMock(return_value=[1, 2, 3])
        backend = LangChainEmbeddingBackend(embeddings, name="test:embed")

        vector = await backend.embed("hello")

        assert vector == [1.0, 2.0, 3.0]
        embeddings.aembed_query.assert_awaited_once_with("hello")
        assert isinstance(backend, EmbeddingBackend)


class TestLangChainGenerationBackend:
    """Test the chat model adapter."""

    @pytest.mark.asyncio
    async def test_complete_sends_system_and_user_turns(self) -> None:
        """Should invoke the chat model with system and human messages."""
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="The answer."))
        factory = MagicMock(return_value=model)
        backend = LangChainGenerationBackend(factory, name="test:chat")

        text = await backend.complete("Be brief.", "Question?", max_tokens=150, temperature=0.1)

        assert text == "The answer."
        factory.assert_called_once_with(0.1, 150)
        messages = model.ainvoke.await_args.args[0]
        assert messages == [SystemMessage(content="Be brief."), HumanMessage(content="Question?")]
        assert isinstance(backend, GenerationBackend)

    @pytest.mark.asyncio
    async def test_models_cached_per_sampling_parameters(self) -> None:
        """Should build one chat model per (temperature, max_tokens) pair."""
        model = MagicMock()
        model.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        factory = MagicMock(return_value=model)
        backend = LangChainGenerationBackend(factory, name="test:chat")

        await backend.complete("s", "u", max_tokens=150, temperature=0.1)
        await backend.complete("s", "u", max_tokens=150, temperature=0.1)
        await backend.complete("s", "u", max_tokens=500, temperature=0.7)

        assert factory.call_count == 2

    def test_message_text_flattens_parts(self) -> None:
        """Should join text parts of list content."""
        content = ["Hello ", {"type": "text", "text": "world"}, {"type": "image"}]

        assert message_text(content) == "Hello world"
        assert message_text("plain") == "plain"


class TestFactories:
    """Test provider selection."""

    def test_none_providers_return_none(self) -> None:
        """Should build no backend for provider 'none'."""
        assert build_embedding_backend(EmbeddingSettings(provider="none")) is None
        assert build_generation_backend(GenerationSettings(provider="none")) is None

    def test_google_embeddings(self) -> None:
        """Should build fixed-dimension Google embeddings."""
        settings = EmbeddingSettings(provider="google", api_key="test-key", dimension=768)

        with patch("context_rag.boundary.llm.google_embeddings.FixedDimensionEmbeddings") as cls:
            backend = build_embedding_backend(settings)

        cls.assert_called_once_with(
            model=settings.model,
            output_dimensionality=768,
            google_api_key="test-key",
        )
        assert backend.name == f"google:{settings.model}"

    def test_openai_embeddings(self) -> None:
        """Should build OpenAI embeddings."""
        settings = EmbeddingSettings(provider="openai", model="text-embedding-3-small", api_key="sk-test")

        with patch("langchain_openai.OpenAIEmbeddings") as cls:
            backend = build_embedding_backend(settings)

        cls.assert_called_once_with(model="text-embedding-3-small", api_key="sk-test")
        assert isinstance(backend, LangChainEmbeddingBackend)

    def test_google_chat_model_built_lazily(self) -> None:
        """Should construct the chat model with the requested sampling parameters."""
        settings = GenerationSettings(provider="google", api_key="test-key")

        with patch("langchain_google_genai.ChatGoogleGenerativeAI") as cls:
            backend = build_generation_backend(settings)
            cls.assert_not_called()
            backend._get_model(0.1, 150)

        cls.assert_called_once_with(
            model=settings.model,
            temperature=0.1,
            max_output_tokens=150,
            google_api_key="test-key",
        )

    def test_unknown_provider(self) -> None:
        """Should reject unknown providers."""
        with pytest.raises(ValueError):
            build_embedding_backend(EmbeddingSettings.model_construct(provider="bogus", model="m"))
        with pytest.raises(ValueError):
            build_generation_backend(GenerationSettings.model_construct(provider="bogus", model="m"))
