"""Application configuration."""

import os
from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from cal_ai.services.registry import CURRENT_USER_KEY, USERS_DATA_KEY
from cal_ai.services.reminders import DEFAULT_POLL_SECONDS

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class StorageBackend(str, Enum):
    FILE = "file"
    SUPABASE = "supabase"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: StorageBackend = StorageBackend.FILE
    data_dir: Path = Path(".cal-ai")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    users_data_key: str = USERS_DATA_KEY
    current_user_key: str = CURRENT_USER_KEY
    openai_api_key: str
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str | None = "low"
    openai_store: bool = False
    barcode_base_url: str = "https://world.openfoodfacts.org"
    reminder_poll_seconds: float = DEFAULT_POLL_SECONDS
    notifications_enabled: bool = True
    timezone: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
