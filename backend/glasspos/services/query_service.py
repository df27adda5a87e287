# Overview: Service-layer operations for caller-supplied SQL; generic execute / query helpers.

"""
Generic query executor.

The shell sends SQL text with `?` placeholders and a flat list of string
parameters. Nothing here parses the SQL or counts placeholders; mismatches
fail inside SQLite and come back as StoreError.
"""
from __future__ import annotations

from typing import Any, Sequence

from ..store import PosStore

EXECUTE_OK_MESSAGE = "Query executed successfully"


def execute_query(store: PosStore, sql: str, params: Sequence[Any] = ()) -> str:
    """Run a statement that returns no rows (INSERT/UPDATE/DELETE/DDL)."""
    store.execute(sql, params)
    return EXECUTE_OK_MESSAGE


def run_query(store: PosStore, sql: str, params: Sequence[Any] = ()) -> list[list[str]]:
    """
    Run a row-returning statement.

    Every row has one entry per result column; every value is text
    regardless of its storage class.
    """
    return store.query(sql, params)


def run_query_rows(store: PosStore, sql: str, params: Sequence[Any] = ()) -> list[dict[str, Any]]:
    """Typed companion to run_query: dicts keyed by column name."""
    return store.query_rows(sql, params)
