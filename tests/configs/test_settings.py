"""Tests for pydantic-settings configuration."""

import pytest
from pydantic import ValidationError

from context_rag.configs import EmbeddingSettings, GenerationSettings, SearchSettings, Settings


class TestDefaults:
    """Test documented defaults."""

    def test_embedding_defaults(self) -> None:
        """Should default to hash-only embeddings with an 8000-char input cap."""
        settings = EmbeddingSettings()

        assert settings.timeout_seconds == 10
        assert settings.max_input_chars == 8000
        assert settings.fallback_enabled is True
        assert settings.fallback_dimension == 384

    def test_generation_defaults(self) -> None:
        """Should default to short, low-temperature completions."""
        settings = GenerationSettings()

        assert settings.max_tokens == 150
        assert settings.temperature == 0.1

    def test_search_defaults(self) -> None:
        """Should default to hybrid ranking with top-3 and a 2000-char context."""
        settings = SearchSettings()

        assert settings.strategy == "hybrid"
        assert settings.chunk_size == 1000
        assert settings.top_k == 3
        assert settings.similarity_threshold == 0.0
        assert settings.context_char_budget == 2000
        assert settings.ingest_batch_size == 3
        assert [c.id for c in settings.seed_contexts] == [1]


class TestEnvironmentOverrides:
    """Test environment variable mapping."""

    def test_prefixed_variables(self, monkeypatch) -> None:
        """Should read each concern from its own prefix."""
        monkeypatch.setenv("EMBEDDING_PROVIDER", "openai")
        monkeypatch.setenv("GENERATION_MAX_TOKENS", "300")
        monkeypatch.setenv("SEARCH_TOP_K", "5")
        monkeypatch.setenv("SEARCH_STRATEGY", "keyword")

        settings = Settings()

        assert settings.embedding.provider == "openai"
        assert settings.generation.max_tokens == 300
        assert settings.search.top_k == 5
        assert settings.search.strategy == "keyword"

    def test_seed_contexts_from_json(self, monkeypatch) -> None:
        """Should parse seed contexts from a JSON list."""
        monkeypatch.setenv(
            "SEARCH_SEED_CONTEXTS",
            '[{"id": 7, "name": "Plant A", "share_point_url": "https://example.com/a"}]',
        )

        settings = SearchSettings()

        assert settings.seed_contexts[0].id == 7
        assert settings.seed_contexts[0].source_url() == "https://example.com/a"


class TestProcessSettings:
    """Test unprefixed process settings."""

    def test_log_level_is_normalised(self, monkeypatch) -> None:
        """Should accept lowercase level names."""
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_rejects_unknown_log_level(self, monkeypatch) -> None:
        """Should fail validation for unknown level names."""
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with pytest.raises(ValidationError):
            Settings()

    def test_production_flag(self, monkeypatch) -> None:
        """Should report production only for the production tier."""
        monkeypatch.setenv("ENVIRONMENT", "production")

        assert Settings().is_production is True
