from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
import os

from app.services.dispatcher import ModelSelector


class Settings(BaseSettings):
    # Model provider
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/"

    # Model tiers, tried in this order by the dispatcher
    primary_model: str = "gemini-2.5-pro"
    fallback_model: str = "gemini-2.5-flash"
    llm_timeout_seconds: float = 90.0
    llm_temperature: float = 0.4

    # App Settings
    app_name: str = "CareerAdvisorAI"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    allowed_origins: str = "http://localhost:3000,http://localhost:9002"
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "8000"))
    rate_limit_enabled: bool = True

    class Config:
        env_file = ".env"
        extra = "ignore"  # LOG_FORMAT and PORT are read elsewhere


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def build_model_selector(settings: Optional[Settings] = None) -> ModelSelector:
    """Build the shared, read-only tier order from settings."""
    settings = settings or get_settings()
    return ModelSelector(models=(settings.primary_model, settings.fallback_model))
