"""
Configuration management for the PoE2 gem tool server.

Loads settings from environment variables and config file, with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POE2_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    wiki_api_url: str = Field(
        default="https://www.poe2wiki.net/w/api.php",
        description="MediaWiki API endpoint of the PoE2 wiki",
    )
    api_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")
    cache_ttl: float = Field(default=3600.0, gt=0, description="Gem cache lifetime in seconds")
    support_query_limit: int = Field(
        default=15, ge=1, description="Maximum rows requested from the Cargo support query"
    )
    raw_excerpt_length: int = Field(
        default=1000,
        ge=0,
        description="Characters of page text returned when a page has no Item template",
    )
    log_level: str = Field(default="INFO", description="Logging level")


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    global _settings
    _settings = Settings()
    return _settings
