"""Application configuration using pydantic-settings."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("config")


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"

    # ==========================================================================
    # Provider API Keys
    # ==========================================================================
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key for chat completions",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of the OpenAI-compatible chat completions API",
    )
    openrouter_api_key: str = Field(
        default="",
        description="OpenRouter API key for LLM",
    )
    openrouter_http_referer: str = Field(
        default="",
        description="OpenRouter HTTP Referer",
    )
    openrouter_x_title: str = Field(
        default="",
        description="OpenRouter X-Title",
    )
    groq_api_key: str = Field(
        default="",
        description="Groq API key for LLM",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_debug_namespaces: str = Field(
        default="",
        description="Comma-separated list of namespaces to enable debug logging",
    )

    # ==========================================================================
    # Observability
    # ==========================================================================
    otel_enabled: bool = False
    otlp_endpoint: str = ""  # OTLP collector endpoint (e.g., http://localhost:4317)
    otel_service_name: str = "orator-engine"

    # ==========================================================================
    # Conversation backend
    # ==========================================================================
    llm_provider: Literal["openai", "openrouter", "groq", "stub"] = "openai"
    llm_model_id: str = Field(
        default="",
        description="Model ID passed to the provider. If empty, the provider default is used.",
    )
    llm_temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for conversation replies",
    )
    llm_max_tokens: int = Field(
        default=1024,
        gt=0,
        description="Maximum tokens generated per reply",
    )
    provider_timeout_llm_seconds: int = Field(
        default=60,
        description="Timeout in seconds for a single chat backend call",
    )

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @computed_field
    @property
    def debug_namespaces(self) -> list[str]:
        """Parse debug namespaces into a list."""
        if not self.log_debug_namespaces:
            return []
        return [ns.strip() for ns in self.log_debug_namespaces.split(",") if ns.strip()]

    def log_config_summary(self) -> None:
        """Log a summary of the configuration (redacting secrets)."""
        logger.info(
            "Configuration loaded",
            extra={
                "service": "config",
                "environment": self.environment,
                "openai_configured": bool(self.openai_api_key),
                "openai_base_url": self._redact_url(self.openai_base_url),
                "openrouter_configured": bool(self.openrouter_api_key),
                "groq_configured": bool(self.groq_api_key),
                "log_level": self.log_level,
                "debug_namespaces": self.debug_namespaces,
                "otel_enabled": self.otel_enabled,
                "llm_provider": self.llm_provider,
                "llm_model_id": self.llm_model_id,
                "provider_timeout_llm_seconds": self.provider_timeout_llm_seconds,
            },
        )

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in a URL."""
        if "@" in url and "://" in url:
            protocol_end = url.index("://") + 3
            at_pos = url.index("@")
            return url[:protocol_end] + "***:***" + url[at_pos:]
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
