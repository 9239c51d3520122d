"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - default_member_count always lies within [1, max_member_count]

Design Decisions:
    - Defaults work out of the box against the public stat.ink API and a local SQLite file
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from splaroulette.core.domain_types import CatalogType, Locale


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Remote catalogs
    rule_catalog_url: str = "https://stat.ink/api/v3/rule"
    stage_catalog_url: str = "https://stat.ink/api/v3/stage"
    weapon_catalog_url: str = "https://stat.ink/api/v3/weapon"
    fetch_timeout_seconds: float = 15.0

    # Keys removed from the fetched rule/stage catalogs
    excluded_rules: list[str] = ["tricolor"]
    excluded_stages: list[str] = ["grand_arena"]

    # Roster
    default_member_count: int = 4
    max_member_count: int = 8
    locale: Locale = Locale.JA

    # Key-value store
    store_url: str = "sqlite:///spla_roulette.db"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @model_validator(mode="after")
    def check_member_bounds(self) -> "Settings":
        if self.max_member_count < 1:
            raise ValueError("max_member_count must be at least 1")
        if not 1 <= self.default_member_count <= self.max_member_count:
            raise ValueError("default_member_count must be within [1, max_member_count]")
        return self

    @property
    def catalog_urls(self) -> dict[CatalogType, str]:
        return {
            CatalogType.RULE: self.rule_catalog_url,
            CatalogType.STAGE: self.stage_catalog_url,
            CatalogType.WEAPON: self.weapon_catalog_url,
        }

    @property
    def exclusions(self) -> dict[CatalogType, frozenset[str]]:
        return {
            CatalogType.RULE: frozenset(self.excluded_rules),
            CatalogType.STAGE: frozenset(self.excluded_stages),
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()
