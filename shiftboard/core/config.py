from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHIFTBOARD_", env_file=".env", extra="ignore"
    )

    app_title: str = "Shift Scheduling Service"

    # Logging
    log_level: str = "INFO"

    # Also check the dates of one create/update request against each other
    check_batch_overlaps: bool = False

    # Pre-load a few sample shifts at startup
    seed_demo_data: bool = False

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
