"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Body reads stop once this many bytes have been accumulated
MAX_PAGE_BYTES = 1024 * 1024


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 1
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Scanner
    scanner_user_agent: str = "BotCheck/1.0 (https://botcheck.app)"
    scanner_robots_timeout: float = 10.0
    scanner_page_timeout: float = 10.0
    scanner_probe_timeout: float = 5.0
    scanner_max_body_bytes: int = MAX_PAGE_BYTES
    crawler_catalog_path: str | None = None  # Defaults to the bundled crawlers.yaml

    # Sentry
    sentry_dsn: str | None = None

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
