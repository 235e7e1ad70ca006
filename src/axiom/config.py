"""
Axiom Configuration

Centralized configuration using Pydantic Settings.
All configuration is loaded from environment variables with sensible defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    """LLM provider configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(default=None, alias="OPENAI_BASE_URL")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL")
    openai_temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    openai_max_tokens: int = Field(default=16000, ge=1)
    request_timeout: float = Field(default=120.0, gt=0.0, alias="AXIOM_LLM_TIMEOUT")

    # Attempts for a single audit call (empty content counts as a failed attempt)
    max_attempts: int = Field(default=3, ge=1, le=10, alias="AXIOM_LLM_MAX_ATTEMPTS")
    retry_backoff_seconds: float = Field(default=2.0, ge=0.0, alias="AXIOM_LLM_RETRY_BACKOFF")


class AuditSettings(BaseSettings):
    """Audit pipeline configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    knowledge_base_path: Path = Field(
        default=Path("knowledge-base"), alias="AXIOM_KNOWLEDGE_BASE_PATH"
    )
    max_manuscript_chars: int = Field(default=50000, ge=1000, alias="AXIOM_MAX_MANUSCRIPT_CHARS")

    @field_validator("knowledge_base_path", mode="before")
    @classmethod
    def resolve_path(cls, v: str | Path) -> Path:
        """Resolve path and expand user."""
        return Path(v).expanduser().resolve()


class RigorSettings(BaseSettings):
    """Rigor-warning thresholds for audit output quality monitoring."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    min_feedback_items: int = Field(default=10, ge=0, alias="AXIOM_MIN_FEEDBACK_ITEMS")
    target_feedback_items: int = Field(default=20, ge=0)
    min_action_items: int = Field(default=8, ge=0, alias="AXIOM_MIN_ACTION_ITEMS")
    target_action_items: int = Field(default=15, ge=0)
    min_quoting_rate: float = Field(default=0.3, ge=0.0, le=1.0, alias="AXIOM_MIN_QUOTING_RATE")
    target_quoting_rate: float = Field(default=0.5, ge=0.0, le=1.0)


class RateLimitSettings(BaseSettings):
    """In-memory rate limiter configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    window_seconds: float = Field(default=60.0, gt=0.0, alias="AXIOM_RATE_LIMIT_WINDOW")
    api_max_requests: int = Field(default=100, ge=1, alias="AXIOM_API_RATE_LIMIT")
    analysis_max_requests: int = Field(default=5, ge=1, alias="AXIOM_ANALYSIS_RATE_LIMIT")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )


class FeatureFlags(BaseSettings):
    """Feature flags for optional functionality."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )

    enrich_resources: bool = Field(default=True, alias="AXIOM_ENRICH_RESOURCES")
    debug: bool = Field(default=False, alias="AXIOM_DEBUG")


class Settings(BaseSettings):
    """
    Main Axiom settings aggregator.

    Usage:
        from axiom.config import get_settings
        settings = get_settings()
        print(settings.llm.openai_model)
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    llm: LLMSettings = Field(default_factory=LLMSettings)
    audit: AuditSettings = Field(default_factory=AuditSettings)
    rigor: RigorSettings = Field(default_factory=RigorSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    features: FeatureFlags = Field(default_factory=FeatureFlags)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance (singleton)."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
