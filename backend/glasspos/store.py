# backend/glasspos/store.py
"""
Connection guard for the embedded SQLite store.

One physical connection, one lock. Every read and write goes through
PosStore.acquire(), which is the only way to get hold of the connection:
the lock is held for the whole body, the work is committed when the body
returns and rolled back when it raises.

Acquisition blocks without a timeout. The lock is not re-entrant, so code
running inside acquire() must use the yielded connection rather than call
back into the store.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator, Sequence

from flask import current_app
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Opaque store failure (constraint violation, malformed SQL, I/O)."""


def store_error_from(exc: SQLAlchemyError) -> StoreError:
    """Reduce a SQLAlchemy exception to the driver's own message."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return StoreError(str(exc.orig))
    return StoreError(str(exc))


def coerce_cell(value: Any) -> str:
    """
    Flatten one column value to text.

    Integers and reals use their str() form, text is returned as-is,
    NULL becomes "" and BLOBs are hex-encoded.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


def typed_cell(value: Any) -> Any:
    """Keep a column value as stored, except BLOBs, which are hex-encoded."""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return value


class PosStore:
    """
    Exclusive-access handle around the single store connection.

    Constructed once by the application factory and shared by reference.
    The connection itself is opened lazily on first acquisition and lives
    until close() or process exit.
    """

    def __init__(self, engine: Engine):
        self._engine = engine
        self._lock = threading.Lock()
        self._connection: Connection | None = None

    @property
    def url(self) -> str:
        return self._engine.url.render_as_string(hide_password=True)

    @contextmanager
    def acquire(self) -> Iterator[Connection]:
        with self._lock:
            if self._connection is None:
                logger.info("Opening database: %s", self.url)
                self._connection = self._engine.connect()
            conn = self._connection
            try:
                yield conn
            except Exception:
                conn.rollback()
                raise
            else:
                conn.commit()

    @contextmanager
    def _guarded(self) -> Iterator[Connection]:
        """acquire() with SQLAlchemy errors translated to StoreError."""
        try:
            with self.acquire() as conn:
                yield conn
        except SQLAlchemyError as exc:
            raise store_error_from(exc) from exc

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Run one statement and return the affected row count."""
        logger.debug("execute: %s", sql)
        with self._guarded() as conn:
            result = conn.exec_driver_sql(sql, tuple(params))
            return result.rowcount

    def query(self, sql: str, params: Sequence[Any] = ()) -> list[list[str]]:
        """Run one statement and return every row as a list of strings."""
        logger.debug("query: %s", sql)
        with self._guarded() as conn:
            result = conn.exec_driver_sql(sql, tuple(params))
            if not result.returns_rows:
                return []
            return [[coerce_cell(value) for value in row] for row in result]

    def query_rows(self, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """
        Typed view: rows as dicts keyed by column name.

        Integers, reals, text and NULL keep their Python type; BLOBs come
        back as hex text so every row is JSON-serializable.
        """
        logger.debug("query_rows: %s", sql)
        with self._guarded() as conn:
            result = conn.exec_driver_sql(sql, tuple(params))
            if not result.returns_rows:
                return []
            return [
                {key: typed_cell(value) for key, value in row.items()}
                for row in result.mappings()
            ]

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None


def get_store() -> PosStore:
    """The application's store handle (set up by create_app)."""
    return current_app.extensions["pos_store"]
