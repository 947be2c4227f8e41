"""Storage port and its two SQLite-dialect implementations.

Every repository talks to a :class:`Storage`. ``SqliteStorage`` wraps a
single stdlib ``sqlite3`` connection for local use; ``SqlAlchemyStorage``
wraps a SQLAlchemy engine so the same SQL can run against a hosted
SQLite-compatible service. SQL statements use named parameters
(``:name``), which both backends understand.
"""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Protocol

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from dress_studio.config import StudioConfig
from dress_studio.db.connection import get_connection
from dress_studio.logging_config import get_logger
from dress_studio.paths import get_db_path
from dress_studio.services.errors import StorageError

Params = Optional[Mapping[str, Any]]
Row = dict[str, Any]


@dataclass(frozen=True)
class ExecResult:
    lastrowid: Optional[int]
    rowcount: int


class Storage(Protocol):
    """Operations every backing store provides."""

    def fetch_all(self, sql: str, params: Params = None) -> list[Row]: ...

    def fetch_one(self, sql: str, params: Params = None) -> Optional[Row]: ...

    def execute(self, sql: str, params: Params = None) -> ExecResult: ...

    def executescript(self, script: str) -> None: ...

    def transaction(self) -> Any: ...

    def table_columns(self, table: str) -> list[str]: ...

    def close(self) -> None: ...


class SqliteStorage:
    """Storage backed by one stdlib sqlite3 connection shared by all requests."""

    def __init__(self, database_path: Path | str) -> None:
        self._database_path = database_path
        self._connection = get_connection(database_path)
        self._lock = threading.RLock()
        self._depth = 0
        self._logger = get_logger(self.__class__.__name__)

    def fetch_all(self, sql: str, params: Params = None) -> list[Row]:
        with self._lock:
            try:
                rows = self._connection.execute(sql, dict(params or {})).fetchall()
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
        return [dict(row) for row in rows]

    def fetch_one(self, sql: str, params: Params = None) -> Optional[Row]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def execute(self, sql: str, params: Params = None) -> ExecResult:
        with self._lock:
            try:
                cursor = self._connection.execute(sql, dict(params or {}))
            except sqlite3.Error as exc:
                raise StorageError(str(exc)) from exc
            return ExecResult(lastrowid=cursor.lastrowid, rowcount=cursor.rowcount)

    def executescript(self, script: str) -> None:
        """Run a multi-statement script atomically."""
        with self._lock:
            try:
                self._connection.executescript(f"BEGIN;\n{script}\nCOMMIT;")
            except sqlite3.Error as exc:
                if self._connection.in_transaction:
                    self._connection.execute("ROLLBACK")
                raise StorageError(str(exc)) from exc

    @contextmanager
    def transaction(self) -> Iterator["SqliteStorage"]:
        """Provide a write-locked transaction scope; nested scopes join the outer one."""
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                try:
                    self._connection.execute("BEGIN IMMEDIATE")
                except sqlite3.Error as exc:
                    raise StorageError(str(exc)) from exc
            self._depth += 1
            try:
                yield self
            except BaseException:
                if outermost and self._connection.in_transaction:
                    self._connection.execute("ROLLBACK")
                raise
            else:
                if outermost:
                    try:
                        self._connection.execute("COMMIT")
                    except sqlite3.Error as exc:
                        raise StorageError(str(exc)) from exc
            finally:
                self._depth -= 1

    def table_columns(self, table: str) -> list[str]:
        return [row["name"] for row in self.fetch_all(f"PRAGMA table_info({table})")]

    def close(self) -> None:
        with self._lock:
            self._connection.close()


def _build_engine(url: str) -> Engine:
    parsed = make_url(url)
    kwargs: dict[str, Any] = {}
    is_sqlite = parsed.get_backend_name() == "sqlite"
    if is_sqlite and parsed.database in (None, "", ":memory:"):
        kwargs.update(
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    engine = create_engine(url, **kwargs)
    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _on_connect(dbapi_connection: Any, _connection_record: Any) -> None:
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON;")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _on_begin(conn: Connection) -> None:
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


class SqlAlchemyStorage:
    """Storage backed by a SQLAlchemy engine (hosted SQLite-compatible service)."""

    def __init__(self, url: str) -> None:
        self._engine = _build_engine(url)
        self._local = threading.local()
        self._logger = get_logger(self.__class__.__name__)

    @property
    def engine(self) -> Engine:
        return self._engine

    def _current(self) -> Optional[Connection]:
        return getattr(self._local, "connection", None)

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        current = self._current()
        if current is not None:
            yield current
            return
        with self._engine.begin() as conn:
            yield conn

    def fetch_all(self, sql: str, params: Params = None) -> list[Row]:
        try:
            with self._connect() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    def fetch_one(self, sql: str, params: Params = None) -> Optional[Row]:
        rows = self.fetch_all(sql, params)
        return rows[0] if rows else None

    def execute(self, sql: str, params: Params = None) -> ExecResult:
        try:
            with self._connect() as conn:
                result = conn.execute(text(sql), dict(params or {}))
                return ExecResult(lastrowid=result.lastrowid, rowcount=result.rowcount)
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    def executescript(self, script: str) -> None:
        """Run a multi-statement script atomically."""
        statements = [part.strip() for part in script.split(";") if part.strip()]
        try:
            with self._engine.begin() as conn:
                for statement in statements:
                    conn.exec_driver_sql(statement)
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyStorage"]:
        """Provide a write-locked transaction scope; nested scopes join the outer one."""
        if self._current() is not None:
            yield self
            return
        try:
            conn = self._engine.connect()
            trans = conn.begin()
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc
        self._local.connection = conn
        try:
            yield self
        except BaseException:
            trans.rollback()
            raise
        else:
            try:
                trans.commit()
            except SQLAlchemyError as exc:
                raise StorageError(str(exc)) from exc
        finally:
            self._local.connection = None
            conn.close()

    def table_columns(self, table: str) -> list[str]:
        return [row["name"] for row in self.fetch_all(f"PRAGMA table_info({table})")]

    def close(self) -> None:
        self._engine.dispose()


def create_storage(config: StudioConfig) -> Storage:
    """Pick the backing store once, from configuration."""
    logger = get_logger("storage")
    if config.database_url:
        logger.info("Using hosted database via SQLAlchemy")
        return SqlAlchemyStorage(config.database_url)
    db_path = config.db_path or get_db_path()
    logger.info("Using local SQLite database at %s", db_path)
    return SqliteStorage(db_path)
