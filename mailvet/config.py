from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    base_url: str = Field(default="http://localhost:8000")
    cors_origins: list[str] = Field(default=["http://localhost:3000"])
    debug: bool = Field(default=False)
    config_path: str = Field(default="config.yml")

    # DNS-over-HTTPS resolver
    doh_resolver_url: str = Field(default="https://dns.google/resolve")
    dns_timeout_seconds: float = Field(default=5.0)
    dns_max_attempts: int = Field(default=2)
    mx_timeout_seconds: float = Field(default=8.0)
    blacklist_timeout_seconds: float = Field(default=3.0)

    # Caches (TTL in seconds)
    mx_cache_ttl: int = Field(default=300)
    mx_cache_size: int = Field(default=1000)
    domain_cache_ttl: int = Field(default=300)
    domain_cache_size: int = Field(default=1000)
    blacklist_cache_ttl: int = Field(default=3600)
    blacklist_cache_size: int = Field(default=500)
    result_cache_ttl: int = Field(default=60)
    result_cache_size: int = Field(default=1000)

    # Bulk validation
    bulk_batch_size: int = Field(default=10)
    bulk_batch_interval_ms: int = Field(default=100)
    bulk_max_interval_ms: int = Field(default=2000)
    bulk_max_emails: int = Field(default=1000)

    # Rate limits (SlowAPI syntax)
    rate_limit_single: str = Field(default="60/minute")
    rate_limit_bulk: str = Field(default="10/minute")


class ReferenceDataConfig:
    """Reference list extensions from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.disposable_domains: list[str] = data.get("disposable_domains", [])
        self.role_prefixes: list[str] = data.get("role_prefixes", [])
        self.free_providers: dict[str, str] = data.get("free_providers", {})
        self.typo_domains: dict[str, str] = data.get("typo_domains", {})
        self.blacklist_hosts: list[str] = data.get("blacklist_hosts", [])
        self.catch_all_domains: list[str] = data.get("catch_all_domains", [])


class ScoringConfig:
    """Scoring configuration from config.yml."""

    def __init__(self, data: dict[str, Any]) -> None:
        self.weights: dict[str, int] = data.get("weights", {})
        self.inconclusive_credit: float = data.get("inconclusive_credit", 0.5)


class AppConfig:
    """Combined application configuration from .env and config.yml."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self._load_yaml()

    def _load_yaml(self) -> None:
        config_path = Path(self.settings.config_path)
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self.reference_data = ReferenceDataConfig(data.get("reference_data", {}))
        self.scoring = ScoringConfig(data.get("scoring", {}))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache
def get_config() -> AppConfig:
    """Get cached full config instance."""
    return AppConfig(get_settings())
