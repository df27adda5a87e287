"""
Command surface: POST /api/commands/<name>.
"""

import json

import pytest

from glasspos.routes import commands


def invoke(client, name, **args):
    return client.post(f"/api/commands/{name}", json=args)


class TestDatabaseCommands:

    def test_run_then_all(self, client):
        response = invoke(
            client, "db_run",
            sql="INSERT INTO customers (id, name, loyalty_points, created_at) VALUES (?, ?, ?, ?)",
            params=["cust-1", "Dana", "15", "2026-02-01T09:00:00+00:00"],
        )
        assert response.status_code == 200
        assert response.json == {"result": "Query executed successfully"}

        response = invoke(client, "db_all", sql="SELECT id, name, loyalty_points FROM customers", params=[])
        assert response.status_code == 200
        assert json.loads(response.json["result"]) == [["cust-1", "Dana", "15"]]

    def test_numeric_params_are_bound_as_strings(self, client):
        invoke(
            client, "db_run",
            sql="INSERT INTO customers (id, name, loyalty_points, created_at) VALUES (?, ?, ?, ?)",
            params=["cust-2", "Eli", 7, "2026-02-01T09:00:00+00:00"],
        )
        response = invoke(client, "db_query", sql="SELECT loyalty_points FROM customers WHERE id = ?", params=["cust-2"])
        assert json.loads(response.json["result"]) == [{"loyalty_points": 7}]

    def test_db_query_returns_typed_rows(self, client):
        response = invoke(client, "db_query", sql="SELECT id, is_active FROM users", params=[])
        assert json.loads(response.json["result"]) == [{"id": "admin-001", "is_active": 1}]

    def test_db_query_blob_is_hex(self, client):
        response = invoke(client, "db_query", sql="SELECT x'00ff' AS b", params=[])
        assert response.status_code == 200
        assert json.loads(response.json["result"]) == [{"b": "00ff"}]

    def test_missing_params_defaults_to_empty(self, client):
        response = invoke(client, "db_all", sql="SELECT name FROM categories")
        assert json.loads(response.json["result"]) == [["General"]]

    def test_store_error_is_returned_as_string(self, client):
        response = invoke(client, "db_run", sql="INSERT INTO missing_table VALUES (?)", params=["x"])
        assert response.status_code == 400
        assert response.json == {"error": "no such table: missing_table"}

    def test_params_must_be_a_list(self, client):
        response = invoke(client, "db_all", sql="SELECT 1", params="nope")
        assert response.status_code == 400
        assert response.json["error"] == "params must be a list"

    def test_nested_params_rejected(self, client):
        response = invoke(client, "db_all", sql="SELECT ?", params=[{"a": 1}])
        assert response.status_code == 400
        assert response.json["error"] == "params[0] must be a string"

    def test_sql_required(self, client):
        response = invoke(client, "db_run", params=[])
        assert response.status_code == 400
        assert response.json["error"] == "sql must be a non-empty string"


class TestUserCommands:

    def test_login_success(self, client):
        response = invoke(client, "login_user", username="admin", password="admin123")

        assert response.status_code == 200
        assert json.loads(response.json["result"]) == {
            "success": True,
            "user": {"id": "admin-001", "username": "admin", "full_name": "System Administrator", "role": "admin"},
        }

    def test_login_accepts_credentials_object(self, client):
        response = invoke(client, "login_user", credentials={"username": "admin", "password": "admin123"})
        assert json.loads(response.json["result"])["success"] is True

    @pytest.mark.parametrize("username,password", [("admin", "nope"), ("ghost", "admin123")])
    def test_login_failure_is_generic(self, client, username, password):
        response = invoke(client, "login_user", username=username, password=password)
        assert response.status_code == 400
        assert response.json == {"error": "Invalid username or password"}

    def test_overlong_password_does_not_reveal_usernames(self, client):
        password = "a" * 100

        known = invoke(client, "login_user", username="admin", password=password)
        unknown = invoke(client, "login_user", username="ghost", password=password)

        assert known.status_code == unknown.status_code == 400
        assert known.json == unknown.json == {"error": "Invalid username or password"}

    def test_login_with_text_active_flag(self, client):
        invoke(client, "db_run", sql="UPDATE users SET is_active = ? WHERE username = ?", params=["false", "admin"])

        response = invoke(client, "login_user", username="admin", password="admin123")

        assert response.status_code == 400
        assert response.json == {"error": "Account is disabled"}

    def test_login_requires_both_fields(self, client):
        response = invoke(client, "login_user", username="admin")
        assert response.status_code == 400
        assert response.json["error"] == "username and password required"

    def test_create_user_and_list(self, client):
        response = invoke(client, "create_user", user={
            "id": "u-2", "username": "sam", "password": "pw-1234", "full_name": "Sam Lee", "role": "cashier",
        })
        assert response.status_code == 200
        assert json.loads(response.json["result"])["user"]["username"] == "sam"

        users = json.loads(invoke(client, "get_users").json["result"])
        assert [u["username"] for u in users] == ["admin", "sam"]
        assert all("password_hash" not in u for u in users)

    def test_create_user_validation(self, client):
        response = invoke(client, "create_user", id="u-3", username="kim", full_name="Kim")
        assert response.status_code == 400
        assert response.json["error"] == "Missing required field(s): password"


class TestBackupCommands:

    def test_export_with_blob_value(self, client):
        invoke(client, "db_run", sql="UPDATE categories SET description = x'00ff'", params=[])

        response = invoke(client, "db_export")

        assert response.status_code == 200
        assert json.loads(response.json["result"])["categories"][0]["description"] == "00ff"

    def test_export_import_round_trip(self, client):
        invoke(
            client, "db_run",
            sql="INSERT INTO suppliers (id, name, created_at) VALUES (?, ?, ?)",
            params=["sup-1", "Acme", "2026-01-01T00:00:00+00:00"],
        )
        exported = invoke(client, "db_export").json["result"]

        invoke(client, "db_run", sql="DELETE FROM suppliers", params=[])
        response = invoke(client, "db_import", data=exported)

        assert response.json == {"result": "Import completed successfully"}
        rows = json.loads(invoke(client, "db_all", sql="SELECT id, name FROM suppliers").json["result"])
        assert rows == [["sup-1", "Acme"]]

    def test_import_requires_data(self, client):
        response = invoke(client, "db_import")
        assert response.status_code == 400


class TestPrinterCommands:

    def test_print_receipt_to_file(self, client, app, tmp_path):
        response = invoke(client, "print_receipt", receipt={
            "business_name": "Glass Shop",
            "items": [{"name": "Tumbler", "quantity": 2, "price": 450}],
            "subtotal": 900,
            "tax": 0,
            "discount": 0,
            "total": 900,
            "currency": "$",
        })

        assert response.status_code == 200
        assert response.json["result"].startswith("Receipt printed successfully")
        written = list((tmp_path / "receipts").glob("receipt-*.txt"))
        assert len(written) == 1
        assert "$9.00" in written[0].read_text(encoding="utf-8")

    def test_print_receipt_rejects_float_money(self, client):
        response = invoke(client, "print_receipt", receipt={
            "business_name": "Glass Shop", "items": [], "total": 9.5, "currency": "$",
        })
        assert response.status_code == 400
        assert response.json["error"] == "total must be an integer, not a decimal"

    def test_printers(self, client, app):
        assert json.loads(invoke(client, "get_printers").json["result"]) == ["file"]

        response = invoke(client, "set_default_printer", printer_name="Front")
        assert response.json == {"result": "Default printer set to: Front"}
        assert app.extensions["pos_printer"].default_printer == "Front"


class TestDispatch:

    def test_unknown_command(self, client):
        response = invoke(client, "db_drop_everything")
        assert response.status_code == 404
        assert response.json == {"error": "Unknown command: db_drop_everything"}

    def test_arguments_must_be_object(self, client):
        response = client.post("/api/commands/db_all", json=["SELECT 1"])
        assert response.status_code == 400

    def test_unexpected_error_is_hidden(self, client, monkeypatch):
        def boom(args):
            raise RuntimeError("secret internals")

        monkeypatch.setitem(commands.COMMANDS, "boom", boom)

        response = invoke(client, "boom")
        assert response.status_code == 500
        assert response.json == {"error": "Internal server error"}

    def test_list_commands(self, client):
        names = client.get("/api/commands").json["commands"]
        assert {"db_query", "db_all", "db_run", "login_user", "get_users", "create_user"} <= set(names)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json["status"] == "healthy"
    assert response.json["database"]["details"]["users"] == 1
