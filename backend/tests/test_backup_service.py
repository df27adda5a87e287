"""
JSON export / import of every table.
"""

import json

import pytest

from glasspos.services.backup_service import export_data, import_data
from glasspos.store import StoreError
from glasspos.validation import ValidationError

from conftest import count_rows


def test_export_contains_every_table(store):
    document = json.loads(export_data(store))

    assert set(document) == {
        "users", "categories", "suppliers", "products", "customers",
        "sales", "sale_items", "expenses", "shifts", "timestamp",
    }
    assert document["categories"][0]["name"] == "General"
    assert document["timestamp"].endswith("Z")


def test_import_replaces_named_tables_only(store):
    store.execute(
        "INSERT INTO customers (id, name, created_at) VALUES ('c-old', 'Old', '2026-01-01T00:00:00+00:00')"
    )

    inserted = import_data(store, {
        "customers": [
            {"id": "c-1", "name": "New", "loyalty_points": 3, "created_at": "2026-01-02T00:00:00+00:00"},
        ],
    })

    assert inserted == 1
    assert store.query("SELECT id, loyalty_points FROM customers") == [["c-1", "3"]]
    # untouched tables keep their rows
    assert count_rows(store, "users") == 1


def test_import_rejects_unknown_table(store):
    with pytest.raises(ValidationError) as exc:
        import_data(store, {"customers; DROP TABLE users": []})
    assert "Unknown table(s)" in str(exc.value)


def test_import_rejects_unknown_column(store):
    with pytest.raises(ValidationError):
        import_data(store, {"customers": [{"id": "c-1", "name) VALUES ('x'); --": "x"}]})


def test_import_rejects_invalid_json(store):
    with pytest.raises(ValidationError):
        import_data(store, "{not json")


def test_failed_import_changes_nothing(store):
    with pytest.raises(StoreError):
        # name is NOT NULL
        import_data(store, {"categories": [{"id": "cat-002", "created_at": "2026-01-01T00:00:00+00:00"}]})

    assert store.query("SELECT id FROM categories") == [["cat-001"]]
