"""Database connection helpers."""

from __future__ import annotations

import sqlite3
from pathlib import Path


def get_connection(database_path: Path | str) -> sqlite3.Connection:
    """Create a SQLite connection with foreign keys enabled.

    The connection runs in autocommit mode; transactions are opened
    explicitly with ``BEGIN IMMEDIATE`` by the storage layer so that the
    write lock is taken before any read inside the transaction.
    """
    if str(database_path) != ":memory:":
        Path(database_path).parent.mkdir(parents=True, exist_ok=True)
    connection = sqlite3.connect(
        str(database_path),
        isolation_level=None,
        check_same_thread=False,
    )
    connection.row_factory = sqlite3.Row
    connection.execute("PRAGMA foreign_keys = ON;")
    return connection
