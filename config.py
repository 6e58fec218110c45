"""
Centralised settings loader.

Values come from the environment (or a local `.env`); field names map to
upper-case env vars, e.g. `database_url` ← DATABASE_URL.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.menu import DEFAULT_MONTH, DEFAULT_YEAR


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime ─────────────────────────────────────────────────────
    env_name: str = "local"
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # ─── DB ──────────────────────────────────────────────────────────
    database_url: str | None = None
    db_connect_timeout: float = Field(10.0, gt=0)
    db_echo: bool = False

    # ─── menu cycle defaults ─────────────────────────────────────────
    default_month: str = DEFAULT_MONTH
    default_year: int = DEFAULT_YEAR
    # "lexical" reproduces the legacy breakfast < dinner < lunch order
    slot_order: Literal["chronological", "lexical"] = "chronological"

    # allow other teammates’ env-vars without crashing
    model_config = SettingsConfigDict(
        extra="ignore", env_file=".env", env_file_encoding="utf-8"
    )


DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./mess.db"


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
