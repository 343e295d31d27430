from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Notilify
    NOTILIFY_API_KEY: str = Field(default="")
    NOTILIFY_TIMEOUT_SECONDS: float = Field(default=20.0, gt=0)
    NOTILIFY_USER_AGENT: str = Field(default="notilify-python/1.0")

    # Logging (setup_logging)
    NOTILIFY_LOG_LEVEL: str = Field(default="INFO")


settings = Settings()
