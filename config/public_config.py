from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PublicConfig(BaseSettings):
    """
    Plugin config with safe defaults.

    Loaded from (in order):
      - process env
      - optional `.env` file
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- platform / bridge ---
    # Injected platform identity; selects the defaults table (android|ios).
    platform: str = Field(default="android", alias="LOCALNOTIFY_PLATFORM")
    service_name: str = Field(default="LocalNotification", alias="LOCALNOTIFY_SERVICE")

    # --- logging ---
    log_level: str = Field(default="INFO", alias="LOCALNOTIFY_LOG_LEVEL")
    log_dir: Path = Field(
        default_factory=lambda: (Path.cwd() / "logs").resolve(), alias="LOCALNOTIFY_LOG_DIR"
    )
    log_max_bytes: int = Field(default=5 * 1024 * 1024, alias="LOCALNOTIFY_LOG_MAX_BYTES")
    log_backup_count: int = Field(default=3, alias="LOCALNOTIFY_LOG_BACKUP_COUNT")
