"""Repository for the key/value settings table."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.logging_config import get_logger


def _now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


class SettingsRepo:
    """Stored settings; defaults live in the settings service."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self._logger = get_logger(self.__class__.__name__)

    def get_all(self) -> dict[str, Optional[str]]:
        try:
            rows = self._storage.fetch_all("SELECT key, value FROM settings ORDER BY key")
        except Exception:
            self._logger.exception("Failed to load settings")
            raise
        return {row["key"]: row["value"] for row in rows}

    def get(self, key: str) -> Optional[str]:
        try:
            row = self._storage.fetch_one(
                "SELECT value FROM settings WHERE key = :key",
                {"key": key},
            )
        except Exception:
            self._logger.exception("Failed to load setting key=%s", key)
            raise
        return row["value"] if row else None

    def has(self, key: str) -> bool:
        try:
            row = self._storage.fetch_one(
                "SELECT 1 AS present FROM settings WHERE key = :key",
                {"key": key},
            )
        except Exception:
            self._logger.exception("Failed to check setting key=%s", key)
            raise
        return row is not None

    def upsert(self, key: str, value: Optional[str]) -> None:
        try:
            self._storage.execute(
                """
                INSERT INTO settings (key, value, updated_at)
                VALUES (:key, :value, :updated_at)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                {"key": key, "value": value, "updated_at": _now_iso()},
            )
        except Exception:
            self._logger.exception("Failed to save setting key=%s", key)
            raise
