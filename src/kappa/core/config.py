from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="KAPPA_"
    )

    # kraken
    base_url: str = "https://api.twitch.tv/kraken"
    client_id: str | None = Field(default=None, repr=False)
    api_version: int = 2

    # http
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0

    log_level: str = "WARNING"


settings = Settings()
