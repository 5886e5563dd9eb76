"""Centralized configuration for the policy generation backend."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./policies.db"

    # Gemini API (only used when AI tailoring is enabled)
    GEMINI_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""  # Fallback for legacy compatibility

    # Policy tailoring
    AI_TAILORING_ENABLED: bool = False
    POLICY_MODEL: str = "gemini-2.5-pro"
    POLICY_TEMPERATURE: float = 0.3

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Environment
    APP_ENV: str = "dev"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_gemini_api_key(self) -> str:
        """Get Gemini API key with fallback to GOOGLE_API_KEY."""
        return self.GEMINI_API_KEY or self.GOOGLE_API_KEY

    def validate_critical(self) -> None:
        """Validate that critical environment variables are set."""
        errors: List[str] = []
        if self.AI_TAILORING_ENABLED and not self.get_gemini_api_key():
            errors.append("GEMINI_API_KEY (or GOOGLE_API_KEY) is required when AI_TAILORING_ENABLED is set")
        if errors:
            raise RuntimeError("Missing required environment variables: " + "; ".join(errors))

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.APP_ENV.lower() == "dev"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.APP_ENV.lower() == "production"


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Get cached configuration instance."""
    config = Config()
    config.validate_critical()
    return config
