"""Application settings.

Loads from environment variables with the ``PANDIT_SITE_`` prefix, e.g.
``PANDIT_SITE_SUPABASE_URL=https://xyz.supabase.co``.
"""

from functools import lru_cache

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PANDIT_SITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    supabase_url: str = Field(
        default="",
        description="Base URL of the hosted Supabase project.",
    )
    supabase_anon_key: SecretStr = Field(
        default=SecretStr(""),
        description="Public anon key sent as both apikey and bearer token.",
    )
    site_url: str = Field(
        default="https://panditrajesh.ie",
        description="Public origin used to build canonical URLs.",
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0, le=60)
    page_cache_ttl_seconds: int = Field(
        default=5 * 60,
        ge=0,
        description="Freshness window for page metadata and blog posts.",
    )
    defaults_cache_ttl_seconds: int = Field(
        default=10 * 60,
        ge=0,
        description="Freshness window for site-wide metadata defaults.",
    )
    log_level: str = Field(default="INFO", description="Root logger level.")

    def __repr__(self) -> str:
        return f"Settings(supabase_url={self.supabase_url!r}, site_url={self.site_url!r})"


@lru_cache
def get_settings() -> Settings:
    return Settings()
