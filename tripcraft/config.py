"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Oracle (generative provider)
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    oracle_temperature: float = 0.7
    oracle_timeout_seconds: float = 60.0

    # Cache
    redis_url: str | None = None
    cache_prefix: str = "tripcraft-cache:"
    cache_ttl_seconds: int = 3600

    # Saved plans
    plans_dir: str = "saved_plans"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
