"""Application configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from dress_studio.version import __app_name__, __company__

APP_NAME = __app_name__
APP_DATA_DIRNAME = "DressStudio"
DB_FILENAME = "studio.db"
LOGS_DIRNAME = "logs"
LOG_FILENAME = "app.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUP_COUNT = 3
EXPORTS_DIRNAME = "exports"
DEFAULT_PORT = 3001
DEFAULT_HOST = "127.0.0.1"
DEFAULT_UPCOMING_DAYS = 7
DEFAULT_COUNTRY_CODE = "972"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(frozen=True)
class StudioConfig:
    """Runtime configuration for DressStudio.

    ``database_url`` selects the hosted backend; when it is empty the local
    SQLite file at ``db_path`` (or the per-user default) is used.
    """

    app_name: str = APP_NAME
    organization_name: str = __company__
    database_url: Optional[str] = None
    db_path: Optional[Path] = None
    strict_update_overlap: bool = False
    strict_release: bool = False
    upcoming_days: int = DEFAULT_UPCOMING_DAYS
    country_code: str = DEFAULT_COUNTRY_CODE
    log_level: str = "INFO"
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def load_config(env_file: Optional[Path] = None) -> StudioConfig:
    """Build the configuration from the environment and an optional .env file."""
    load_dotenv(env_file)
    db_path = os.getenv("STUDIO_DB_PATH")
    return StudioConfig(
        database_url=os.getenv("STUDIO_DATABASE_URL") or None,
        db_path=Path(db_path) if db_path else None,
        strict_update_overlap=_env_flag("STUDIO_STRICT_UPDATE_OVERLAP"),
        strict_release=_env_flag("STUDIO_STRICT_RELEASE"),
        upcoming_days=_env_int("STUDIO_UPCOMING_DAYS", DEFAULT_UPCOMING_DAYS),
        country_code=os.getenv("STUDIO_COUNTRY_CODE", DEFAULT_COUNTRY_CODE),
        log_level=os.getenv("STUDIO_LOG_LEVEL", "INFO").upper(),
        host=os.getenv("STUDIO_HOST", DEFAULT_HOST),
        port=_env_int("PORT", DEFAULT_PORT),
    )
