# backend/glasspos/routes/system.py
"""
System health endpoint.

Reports whether the store answers and which tables are present.
"""

import time
from flask import Blueprint, current_app, jsonify

from ..models import SCHEMA_TABLES
from ..store import StoreError, get_store
from ..services.schema_service import existing_tables

system_bp = Blueprint("system", __name__)


def check_database_health() -> dict:
    """
    Check database connectivity and schema presence.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        store = get_store()
        tables = existing_tables(store)
        user_count = int(store.query("SELECT COUNT(*) FROM users")[0][0])

        elapsed_ms = (time.time() - start_time) * 1000
        missing = sorted({t.name for t in SCHEMA_TABLES} - set(tables))

        return {
            "status": "healthy" if not missing else "degraded",
            "latency_ms": round(elapsed_ms, 2),
            "details": {
                "users": user_count,
                "missing_tables": missing,
            }
        }
    except StoreError:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Database health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Database error"
        }


@system_bp.get("/api/health")
def health():
    database = check_database_health()
    status_code = 200 if database["status"] == "healthy" else 503
    return jsonify({"status": database["status"], "database": database}), status_code
