"""
Process-level settings shared by the API and the pipeline.

Covers the runtime environment, log verbosity, bind address and the origins
allowed to call the API from a browser. Concern-specific settings live in
their own modules with their own env prefixes.

Dependencies: pydantic, pydantic_settings
System role: Root of the settings hierarchy
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BaseSettings(PydanticBaseSettings):
    """Unprefixed process settings (ENVIRONMENT, LOG_LEVEL, HOST, ...)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment tier reported by the health endpoint",
    )
    debug: bool = Field(
        default=False,
        description="Reload the server on code changes",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logger level",
    )
    host: str = Field(default="127.0.0.1", description="API bind address")
    port: int = Field(default=8082, ge=1, le=65535, description="API port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Browser origins allowed to call the API",
    )

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
