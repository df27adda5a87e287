# Overview: Flask API routes for the front-end command surface; parses input and returns JSON responses.

# backend/glasspos/routes/commands.py
"""
Command surface for the GUI shell.

Every command is POST /api/commands/<name> with a JSON object of named
arguments. A command either succeeds with a string payload (plain text or
JSON-encoded) or fails with a human-readable error string:

    200 {"result": "<payload>"}
    400 {"error": "<message>"}     store / validation / auth / printer errors
    404 {"error": "Unknown command: <name>"}
    500 {"error": "Internal server error"}
"""
import json

from flask import Blueprint, request, jsonify, current_app

from ..store import StoreError, get_store
from ..services import auth_service, backup_service, query_service
from ..services.auth_service import AuthenticationError, PasswordHashError
from ..services.printer_service import PrinterError, Receipt
from ..validation import ValidationError, normalize_params, require_string


commands_bp = Blueprint("commands", __name__, url_prefix="/api/commands")

COMMANDS = {}

# Failures reported back to the shell verbatim
COMMAND_ERRORS = (StoreError, ValidationError, AuthenticationError, PasswordHashError, PrinterError)


def command(name: str):
    """Register a handler taking the parsed argument dict and returning a string."""
    def register(func):
        COMMANDS[name] = func
        return func
    return register


def _sql_args(args: dict) -> tuple[str, list]:
    return require_string(args, "sql"), normalize_params(args.get("params"))


def _nested(args: dict, key: str) -> dict:
    """Accept both {"key": {...}} and a flat argument object."""
    inner = args.get(key)
    if inner is None:
        return args
    if not isinstance(inner, dict):
        raise ValidationError(f"{key} must be an object")
    return inner


def _printer():
    return current_app.extensions["pos_printer"]


# --- database -----------------------------------------------------------

@command("db_query")
def db_query(args: dict) -> str:
    sql, params = _sql_args(args)
    return json.dumps(query_service.run_query_rows(get_store(), sql, params))


@command("db_all")
def db_all(args: dict) -> str:
    sql, params = _sql_args(args)
    return json.dumps(query_service.run_query(get_store(), sql, params))


@command("db_run")
def db_run(args: dict) -> str:
    sql, params = _sql_args(args)
    return query_service.execute_query(get_store(), sql, params)


@command("db_export")
def db_export(args: dict) -> str:
    return backup_service.export_data(get_store())


@command("db_import")
def db_import(args: dict) -> str:
    data = args.get("data")
    if data is None:
        raise ValidationError("data is required")
    backup_service.import_data(get_store(), data)
    return "Import completed successfully"


# --- users ----------------------------------------------------------------

@command("login_user")
def login_user(args: dict) -> str:
    credentials = _nested(args, "credentials")
    username = credentials.get("username")
    password = credentials.get("password")
    if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
        raise ValidationError("username and password required")

    user = auth_service.login(get_store(), username, password)
    return json.dumps({"success": True, "user": user})


@command("get_users")
def get_users(args: dict) -> str:
    return json.dumps(auth_service.list_users(get_store()))


@command("create_user")
def create_user(args: dict) -> str:
    user = auth_service.create_user(get_store(), _nested(args, "user"))
    return json.dumps({"success": True, "user": user})


# --- printing -------------------------------------------------------------

@command("print_receipt")
def print_receipt(args: dict) -> str:
    receipt = Receipt.from_dict(_nested(args, "receipt"))
    current_app.logger.info("Printing receipt for %s", receipt.business_name)
    return _printer().submit(receipt)


@command("get_printers")
def get_printers(args: dict) -> str:
    return json.dumps(_printer().list_printers())


@command("set_default_printer")
def set_default_printer(args: dict) -> str:
    return _printer().set_default(require_string(args, "printer_name"))


@commands_bp.post("/<name>")
def invoke_command(name: str):
    """
    Dispatch one shell command.

    Errors raised by services are returned as strings; anything unexpected
    is logged and hidden behind a generic message.
    """
    handler = COMMANDS.get(name)
    if handler is None:
        return jsonify({"error": f"Unknown command: {name}"}), 404

    args = request.get_json(silent=True)
    if args is None:
        args = {}
    if not isinstance(args, dict):
        return jsonify({"error": "Command arguments must be a JSON object"}), 400

    try:
        return jsonify({"result": handler(args)}), 200
    except COMMAND_ERRORS as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Command %s failed", name)
        return jsonify({"error": "Internal server error"}), 500


@commands_bp.get("")
def list_commands():
    return jsonify({"commands": sorted(COMMANDS)})
