"""
seeder/config.py

Seed run configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from db.config import load_env_files

_DEFAULT_CSV_DIR = "data/seed"
_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading seed settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_list_env(name: str) -> tuple[str, ...] | None:
    """
    Read a comma-separated list; blank or unset yields None.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items or None


@dataclass(frozen=True)
class SeedSettings:
    """
    Runtime settings for a seed run.

    ``entities`` limits the run to a subset of entity types; None means all.
    ``fail_on_row_errors`` turns per-row upsert failures into a failing exit
    status; by default only structural errors fail the run.
    """

    csv_dir: Path = Path(_DEFAULT_CSV_DIR)
    entities: tuple[str, ...] | None = None
    fail_on_row_errors: bool = False
    log_level: str = "INFO"


def _normalize_log_level(raw: str) -> str:
    level = raw.strip().upper()
    return level if level in _ALLOWED_LOG_LEVELS else "INFO"


@lru_cache(maxsize=1)
def get_seed_settings() -> SeedSettings:
    """
    Return cached seed settings from environment variables.
    """

    return SeedSettings(
        csv_dir=Path(_get_str_env("SEED_CSV_DIR", _DEFAULT_CSV_DIR)).expanduser(),
        entities=_get_list_env("SEED_ENTITIES"),
        fail_on_row_errors=_get_bool_env("SEED_FAIL_ON_ROW_ERRORS", False),
        log_level=_normalize_log_level(_get_str_env("LOG_LEVEL", "INFO")),
    )
