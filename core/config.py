"""
Application configuration.

Settings are read from environment variables (or a ``.env`` file in the
project root). Supabase credentials are optional; without them the
integrations run in offline mode and every remote call fails cleanly.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- Backend --
    SUPABASE_URL: str | None = Field(
        default=None,
        description="Base URL of the Supabase project, e.g. https://xyz.supabase.co",
    )
    SUPABASE_ANON_KEY: str | None = Field(
        default=None,
        description="Public anon key used for the RPC calls.",
    )
    CLIENT_INFO: str = Field(
        default="streamlit",
        description="Client-identifying string sent along with email registrations.",
    )

    # -- Local persistence --
    SESSION_FILE: str = Field(
        default="session_data.json",
        description="JSON file backing the local key-value store.",
    )

    # -- App --
    LOG_LEVEL: str = "INFO"
    RENTAL_APPLICATION_URL: str = "https://www.rentwithclara.com/portable-rental-application"

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
