"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["file", "supabase"] = "file"
    data_dir: Path = Path(".fitness-ledger")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "ledger_blobs"
    photo_max_width: int = 1024
    photo_quality: int = 80
    heatmap_days: int = 90
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
