"""Centralized configuration for the Foresight backend."""
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration from environment variables."""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./foresight.db"

    # Gemini API
    GEMINI_API_KEY: str = ""
    GOOGLE_API_KEY: str = ""  # Fallback for legacy compatibility

    # Generation
    GENERATION_MODEL: str = "gemini-2.5-flash"
    GENERATION_TEMPERATURE: float = 0.7
    GENERATION_MAX_OUTPUT_TOKENS: int = 8192
    GENERATION_TIMEOUT_SECONDS: float = 60.0
    GENERATION_MAX_RETRIES: int = 2
    GENERATION_RETRY_DELAY_SECONDS: float = 1.0
    GENERATION_MAX_CONCURRENCY: int = 4

    # Auth (Supabase-issued bearer tokens)
    SUPABASE_JWT_SECRET: str = ""
    SUPABASE_JWKS_URL: str = ""
    JWT_AUDIENCE: str = "authenticated"

    # Text-to-speech
    ELEVEN_LABS_API_KEY: str = ""
    ELEVEN_LABS_VOICE_ID: str = "Rachel"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

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
        if not self.get_gemini_api_key():
            errors.append("GEMINI_API_KEY (or GOOGLE_API_KEY) is required")
        if self.GENERATION_MAX_CONCURRENCY < 1:
            errors.append("GENERATION_MAX_CONCURRENCY must be at least 1")
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
