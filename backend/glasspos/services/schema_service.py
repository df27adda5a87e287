# Overview: Service-layer operations for schema bootstrap; creates the fixed tables idempotently.

"""
Schema bootstrap.

Creates the nine fixed tables if they are missing. Safe to run on every
startup: existing tables are left untouched and no data is changed.

Tables are created one at a time, each in its own guarded acquisition, so a
failure part-way through leaves the earlier tables in place. The caller
(create_app / `flask system init`) treats any failure as fatal.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from ..models import SCHEMA_TABLES
from ..store import PosStore, StoreError, store_error_from

logger = logging.getLogger(__name__)


class BootstrapError(StoreError):
    """A table could not be created; the schema may be partially applied."""

    def __init__(self, index: int, table_name: str, cause: str):
        self.index = index
        self.table_name = table_name
        super().__init__(f"Failed to create table {index} ({table_name}): {cause}")


def bootstrap(store: PosStore, tables=SCHEMA_TABLES) -> None:
    """
    Create every table in `tables` that does not exist yet.

    Raises BootstrapError naming the 1-based index of the first table that
    failed.
    """
    logger.info("Initializing database schema")

    for index, table in enumerate(tables, start=1):
        try:
            with store.acquire() as conn:
                table.create(conn, checkfirst=True)
        except SQLAlchemyError as exc:
            raise BootstrapError(index, table.name, str(store_error_from(exc))) from exc

    logger.info("Database tables ready (%d)", len(tables))


def existing_tables(store: PosStore) -> list[str]:
    """Names of the user tables currently present in the store file."""
    rows = store.query(
        "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%' ORDER BY name"
    )
    return [row[0] for row in rows]


def initialize_database(store: PosStore) -> dict[str, str | None]:
    """
    Startup sequence: bootstrap (fatal on failure), then seed defaults
    (failures reported, never fatal). Returns the seed outcome.
    """
    from .seed_service import seed_defaults

    bootstrap(store)
    outcome = seed_defaults(store)
    logger.info("Database initialization completed")
    return outcome
