"""
Generation backend configuration settings.

Dependencies: pydantic, pydantic_settings
System role: Chat model configuration for answer synthesis
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GenerationSettings(BaseSettings):
    """Chat model configuration used by the answer synthesizer."""

    model_config = SettingsConfigDict(
        env_prefix="GENERATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: Literal["google", "openai", "none"] = Field(
        default="none",
        description="Chat provider: 'google', 'openai', or 'none' for extractive answers",
    )
    model: str = Field(
        default="gemini-2.5-flash",
        description="Chat model ID (e.g. gpt-4o for OpenAI)",
    )
    api_key: str | None = Field(default=None, description="Provider API key")
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single completion call",
    )
    max_tokens: int = Field(default=150, gt=0, description="Completion token limit")
    temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Sampling temperature (low for factual answers)",
    )
