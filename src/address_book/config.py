# src/address_book/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Settings are read once at startup and passed explicitly (e.g. the
  reminder window goes into the Model, never into a global).
"""

from __future__ import annotations

import functools
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .model.task import DEFAULT_REMINDER_DAYS

ENV_PREFIX = "ADDRESS_BOOK"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int, *, minimum: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Tasks ----
    reminder_days: int

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    db_path: Path

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "address-book") or "address-book"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        reminder_days = _env_int(_k("REMINDER_DAYS"), DEFAULT_REMINDER_DAYS, minimum=0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/address_book"))
        db_path = _env_path(_k("DB_PATH"), data_dir / "address_book.sqlite3")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            reminder_days=reminder_days,
            data_dir=data_dir,
            db_path=db_path,
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Existing environment variables win over .env entries.
    load_dotenv(override=False)
    return Settings.from_env()
