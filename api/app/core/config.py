"""Application configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "TeeSheet"
    debug: bool = True
    api_prefix: str = "/api/v1"
    log_level: str = "INFO"

    # Tee sheet
    default_max_players_per_slot: int = 4
    max_preview_days: int = 31

    # Used for sunset-relative twilight when a course config has no timezone
    default_timezone: str = "Europe/London"

    model_config = {"env_prefix": "TS_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
