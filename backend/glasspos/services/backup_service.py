# Overview: Service-layer operations for backups; JSON export and import of every table.

"""
Backup export / import.

Export writes one key per table holding typed row objects, plus a
timestamp. Import replaces the contents of the tables it names, all inside
one guarded acquisition: either every row lands or nothing changes.

Table and column names are checked against the declared schema before
they are spliced into SQL.
"""
from __future__ import annotations

import json

from sqlalchemy.exc import SQLAlchemyError

from ..models import SCHEMA_TABLES
from ..store import PosStore, store_error_from
from ..time_utils import to_utc_z, utcnow
from ..validation import ValidationError, only_known

TABLES_BY_NAME = {table.name: table for table in SCHEMA_TABLES}

# Children before parents so declared references never dangle mid-import
DELETE_ORDER = tuple(reversed([table.name for table in SCHEMA_TABLES]))


def export_data(store: PosStore) -> str:
    data: dict = {}
    for name in TABLES_BY_NAME:
        data[name] = store.query_rows(f"SELECT * FROM {name}")
    data["timestamp"] = to_utc_z(utcnow())
    return json.dumps(data, indent=2)


def _parse(document: str | dict) -> dict:
    if isinstance(document, str):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Backup is not valid JSON: {exc}")
    if not isinstance(document, dict):
        raise ValidationError("Backup must be a JSON object")

    tables = {key: value for key, value in document.items() if key != "timestamp"}
    only_known(list(tables), TABLES_BY_NAME, "table(s)")

    for name, rows in tables.items():
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            raise ValidationError(f"{name} must be a list of row objects")
        allowed = TABLES_BY_NAME[name].columns.keys()
        for row in rows:
            only_known(list(row), allowed, f"column(s) in {name}")
    return tables


def import_data(store: PosStore, document: str | dict) -> int:
    """
    Replace table contents with the rows in `document`.

    Only tables present in the document are cleared. Returns the number of
    rows inserted.
    """
    tables = _parse(document)
    inserted = 0

    try:
        with store.acquire() as conn:
            for name in DELETE_ORDER:
                if name in tables:
                    conn.exec_driver_sql(f"DELETE FROM {name}")

            for name in TABLES_BY_NAME:
                for row in tables.get(name, ()):
                    if not row:
                        continue
                    columns = list(row)
                    placeholders = ", ".join("?" for _ in columns)
                    conn.exec_driver_sql(
                        f"INSERT INTO {name} ({', '.join(columns)}) VALUES ({placeholders})",
                        tuple(row[c] for c in columns),
                    )
                    inserted += 1
    except SQLAlchemyError as exc:
        raise store_error_from(exc) from exc

    return inserted
