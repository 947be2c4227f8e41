"""Database migrations for schema versioning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from dress_studio.db.storage import Storage
from dress_studio.logging_config import get_logger


@dataclass(frozen=True)
class Migration:
    version: int
    script: str
    only_if_column: Optional[tuple[str, str]] = None


MIGRATIONS: list[Migration] = [
    Migration(
        version=1,
        script="""
        CREATE TABLE IF NOT EXISTS dresses (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            size TEXT,
            color TEXT,
            rental_price REAL NOT NULL DEFAULT 0 CHECK (rental_price >= 0),
            image_path TEXT,
            status TEXT NOT NULL DEFAULT 'available'
                CHECK (status IN ('available', 'rented', 'maintenance')),
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS customers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            phone TEXT,
            email TEXT,
            address TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS rentals (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            dress_id INTEGER NOT NULL,
            customer_id INTEGER NOT NULL,
            start_date TEXT NOT NULL,
            end_date TEXT NOT NULL,
            total_price REAL NOT NULL DEFAULT 0 CHECK (total_price >= 0),
            deposit REAL NOT NULL DEFAULT 0 CHECK (deposit >= 0),
            status TEXT NOT NULL DEFAULT 'active'
                CHECK (status IN ('active', 'completed', 'cancelled')),
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (dress_id) REFERENCES dresses(id),
            FOREIGN KEY (customer_id) REFERENCES customers(id),
            CHECK (end_date >= start_date)
        );

        CREATE TABLE IF NOT EXISTS payments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            rental_id INTEGER NOT NULL,
            amount REAL NOT NULL,
            payment_date TEXT NOT NULL,
            method TEXT,
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (rental_id) REFERENCES rentals(id)
        );

        CREATE TABLE IF NOT EXISTS appointments (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            customer_id INTEGER,
            dress_id INTEGER,
            type TEXT NOT NULL
                CHECK (type IN ('fitting', 'pickup', 'return', 'other')),
            date TEXT NOT NULL,
            time TEXT,
            notes TEXT,
            status TEXT NOT NULL DEFAULT 'scheduled'
                CHECK (status IN ('scheduled', 'completed', 'cancelled')),
            reminder_sent INTEGER NOT NULL DEFAULT 0,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (customer_id) REFERENCES customers(id) ON DELETE SET NULL,
            FOREIGN KEY (dress_id) REFERENCES dresses(id) ON DELETE SET NULL
        );

        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_rentals_dress_dates
            ON rentals(dress_id, start_date, end_date);
        CREATE INDEX IF NOT EXISTS idx_rentals_customer_id
            ON rentals(customer_id);
        CREATE INDEX IF NOT EXISTS idx_rentals_status
            ON rentals(status);
        CREATE INDEX IF NOT EXISTS idx_payments_rental_id
            ON payments(rental_id);
        CREATE INDEX IF NOT EXISTS idx_payments_payment_date
            ON payments(payment_date);
        CREATE INDEX IF NOT EXISTS idx_appointments_date
            ON appointments(date);
        """,
    ),
    Migration(
        version=2,
        only_if_column=("dresses", "price_per_day"),
        script="""
        ALTER TABLE dresses RENAME COLUMN price_per_day TO rental_price;
        """,
    ),
]


def _fetch_schema_version(storage: Storage) -> int:
    storage.execute(
        """
        CREATE TABLE IF NOT EXISTS app_meta (
            schema_version INTEGER NOT NULL
        )
        """
    )
    row = storage.fetch_one("SELECT schema_version FROM app_meta LIMIT 1")
    if row is None:
        storage.execute("INSERT INTO app_meta (schema_version) VALUES (0)")
        return 0
    return int(row["schema_version"])


def _should_run(storage: Storage, migration: Migration) -> bool:
    if migration.only_if_column is None:
        return True
    table, column = migration.only_if_column
    return column in storage.table_columns(table)


def apply_migrations(storage: Storage) -> int:
    """Apply pending database migrations and return the resulting version."""
    logger = get_logger("migrations")
    with storage.transaction():
        current_version = _fetch_schema_version(storage)

    for migration in MIGRATIONS:
        if migration.version <= current_version:
            continue

        script = migration.script if _should_run(storage, migration) else ""
        storage.executescript(
            f"{script}\nUPDATE app_meta SET schema_version = {migration.version};"
        )
        logger.info("Applied schema migration %s", migration.version)
        current_version = migration.version

    return current_version
