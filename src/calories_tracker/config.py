"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openrouter_api_key: str
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_model: str = "google/gemini-2.0-pro-exp-02-05:free"
    openrouter_referer: str = "expo-calories-tracker"
    openrouter_title: str = "Calories Tracker App"
    openrouter_timeout_seconds: float = 60.0
    openrouter_max_retries: int = 0
    user_store_path: str = ".data/users.json"
    seed_demo_user: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
