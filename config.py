"""
Configuration settings for the skillpath content service.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from skillpath.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Fast provider family (Groq, OpenAI-compatible)
    # ========================================
    groq_api_key: str | None = Field(
        default=None,
        description="Groq API key for the fast/cheap model ladder",
    )
    groq_base_url: str = Field(
        default="https://api.groq.com/openai/v1/chat/completions",
        description="Chat completions endpoint for the fast family",
    )
    groq_models: list[str] = Field(
        default=[
            "llama-3.3-70b-versatile",
            "llama-3.1-8b-instant",
            "gemma2-9b-it",
        ],
        description="Ordered model ladder for the fast family",
    )

    # ========================================
    # Secondary provider family (Google Gemini)
    # ========================================
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Generative AI (Gemini) API key",
    )
    gemini_models: list[str] = Field(
        default=["gemini-1.5-flash", "gemini-1.5-pro"],
        description="Ordered model ladder for the secondary family",
    )

    # ========================================
    # Generation policy
    # ========================================
    max_retries: int = Field(
        default=3,
        description="Whole-cycle attempts for the module content generator",
    )
    retry_delay_seconds: float = Field(
        default=1.0,
        description="Fixed delay between retries (not exponential)",
    )
    temperature: float = Field(
        default=0.3,
        description="Sampling temperature for every provider call",
    )
    max_output_tokens: int = Field(
        default=4096,
        description="Output token ceiling for every provider call",
    )
    grounding_char_budget: int = Field(
        default=5000,
        description="Maximum characters of grounding content passed to quiz prompts",
    )
    request_timeout: float = Field(
        default=60.0,
        description="HTTP timeout in seconds for the fast family",
    )

    # ========================================
    # Document store
    # ========================================
    database_url: str = Field(
        default="sqlite:///./skillpath.db",
        description="SQLAlchemy URL for the reference document store",
    )
    users_collection: str = Field(
        default="users",
        description="Collection holding learner profiles",
    )
    career_paths_collection: str = Field(
        default="career_paths",
        description="Collection holding generated career paths",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    # ========================================
    # Helper Methods
    # ========================================
    def require_provider_keys(self) -> None:
        """Fail fast when a provider family has no API key."""
        missing = []
        if not self.groq_api_key:
            missing.append("GROQ_API_KEY")
        if not self.gemini_api_key:
            missing.append("GEMINI_API_KEY")
        if missing:
            raise ConfigurationError(
                f"Missing provider configuration: {', '.join(missing)}",
                context={"missing": missing},
            )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
