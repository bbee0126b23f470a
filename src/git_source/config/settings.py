"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # General
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_workers: int = 1

    # Restrictive compliance: refuse credentials over non-TLS remotes
    fips_mode: bool = False

    # Always fetch tags, whether or not a tag discovery trait is configured
    ignore_tag_discovery_trait: bool = False

    # Tracked sources
    sources_file: str = "~/.git-source/sources.json"

    # Indexing
    indexing_queue_size: int = 1000

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.sources_file = str(Path(self.sources_file).expanduser())

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
