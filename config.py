"""
Application settings read from the environment and an optional .env file.
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    # Database
    database_path: str = "tasks.db"
    database_timeout: float = 5.0

    # HTTP
    api_prefix: str = "/api"
    docs_url: str = "/api-docs"
    cors_origins: str = "*"
    host: str = "0.0.0.0"
    port: int = 5000

    log_level: str = "INFO"

    @field_validator("api_prefix")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def cors_origin_list(self) -> List[str]:
        """CORS_ORIGINS is a comma-separated list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    return Settings()
