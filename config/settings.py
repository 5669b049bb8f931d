"""Application settings and configuration management."""
from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    CONFIG_PATH: str = Field(default="app_config.json")

    API_PREFIX: str = "/api"
    HOST: str = "127.0.0.1"
    PORT: int = 4000
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    DEFAULT_ROLE: str = "software_engineer"
    DEFAULT_LEVEL: str = "mid"
    DEFAULT_PERSONA: str = "efficient"

    # Used by the terminal client only.
    API_BASE: str = "http://localhost:4000/api"
    CLIENT_TIMEOUT_S: float = 60.0

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
