"""Configuration for the envelope purge HTTP service."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """HTTP service settings loaded from environment variables."""

    HOST: str = "0.0.0.0"
    PORT: int = Field(default=3001, ge=1, le=65535)

    # Origins allowed to call the API from the browser uploader
    CORS_ORIGINS: list[str] = ["*"]

    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
