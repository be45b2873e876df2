"""Application configuration managed via environment variables."""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Personal Assistant Backend"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origin: str = "http://localhost:5173"
    rate_limit_provider: str = "memory"
    rate_limit_window_ms: int = Field(default=15 * 60 * 1000, ge=1000)
    rate_limit_max_requests: int = Field(default=100, ge=1)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 1000
    openai_temperature: float = 0.7
    openai_timeout_seconds: float = 60.0
    # Read by the hosted persistence layer; the API only reports whether they are set.
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    opik_enabled: bool = False
    opik_api_key: str | None = None
    opik_project: str = "daily-planner"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def rate_limit_window_seconds(self) -> float:
        return self.rate_limit_window_ms / 1000


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings()


settings = get_settings()
