"""
MealVibe - Configuration and settings.

Loaded from environment variables and .env.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str

    # Recommendation call
    recommendation_model: str = "gpt-4o"
    recommendation_max_tokens: int = 1000
    recommendation_temperature: float = 0.7

    # Fridge scan (vision) call
    vision_model: str = "gpt-4o"
    vision_max_tokens: int = 150
    vision_temperature: float = 0.1

    # Application
    mealvibe_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # MEALVIBE_LOG_PROMPTS=1 - log prompts to local files (dev only)
    mealvibe_log_prompts: bool = False

    # Auth/profile backend
    auth_backend: Literal["mock", "supabase"] = "mock"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None

    # Wizard
    api_base_url: str | None = None  # Remote deployment for the CLI wizard
    request_timeout_seconds: float = 30.0
    scan_wait_timeout_seconds: float = 10.0
    include_camera_step: bool = True
    session_expire_hours: int = 24  # Drop idle wizard sessions after this

    # Web
    cors_origins: list[str] = ["*"]

    @property
    def is_development(self) -> bool:
        return self.mealvibe_env == "development"

    @property
    def is_production(self) -> bool:
        return self.mealvibe_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
