"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_key: str
    admin_token: str
    openai_api_key: str
    openai_model: str = "gpt-4.1-mini"
    openai_store: bool = False
    storage_bucket: str = "portfolio"
    hero_config_path: Path = Path(".hero_images.json")
    cleanup_orphaned_uploads: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
