"""
MRT Tracker — Configuration via pydantic-settings.

Environment variables override defaults.  The feed options mirror the
browser geolocation watch options (high accuracy, maximum age, timeout).
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import ClassVar

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env_path: ClassVar[str] = str(Path(__file__).resolve().parents[1] / ".env")
    model_config = SettingsConfigDict(
        env_file=env_path,
        env_file_encoding="utf-8",
        env_prefix="MRT_TRACKER_",
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────
    app_name: str = "MRT Tracker"
    debug: bool = False
    log_level: str = "INFO"

    # ── Station registry ───────────────────────────────────────────
    # Empty means the bundled Singapore MRT/LRT station list.
    stations_file: Path | None = None

    # ── Position feed ──────────────────────────────────────────────
    enable_high_accuracy: bool = True
    # Updates older than this (seconds) are discarded.
    maximum_age_s: float = 10.0
    # Emit a TIMEOUT error when no update arrives within this window.
    timeout_s: float = 10.0

    # Reject positions outside [-90, 90] / [-180, 180] instead of
    # passing them straight through the distance formula.
    validate_positions: bool = False


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
