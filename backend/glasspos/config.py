# backend/glasspos/config.py
from __future__ import annotations
import os
from pathlib import Path

from sqlalchemy.pool import StaticPool


def default_data_dir() -> Path:
    """
    Platform application-data directory for the store file.

    Windows: %APPDATA%/GlassPOS
    Elsewhere: $XDG_DATA_HOME/glasspos (default ~/.local/share/glasspos)
    """
    override = os.environ.get("GLASSPOS_DATA_DIR")
    if override:
        return Path(override)

    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return Path(appdata) / "GlassPOS"

    xdg = os.environ.get("XDG_DATA_HOME") or os.path.expanduser("~/.local/share")
    return Path(xdg) / "glasspos"


def default_database_uri() -> str:
    data_dir = default_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(data_dir / 'glasspos.db').as_posix()}"


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # Single SQLite file in the platform data directory unless overridden
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL") or None
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # One physical connection shared by every request thread
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }

    # bcrypt cost factor
    PASSWORD_HASH_ROUNDS = int(os.environ.get("PASSWORD_HASH_ROUNDS", "12"))

    # Create tables and seed defaults inside create_app()
    POS_AUTO_BOOTSTRAP = _env_flag("POS_AUTO_BOOTSTRAP", True)

    # "cups" pipes receipts to lp; "file" writes them to PRINTER_OUTPUT_DIR
    PRINTER_BACKEND = os.environ.get("PRINTER_BACKEND", "cups")
    PRINTER_NAME = os.environ.get("PRINTER_NAME") or None
    PRINTER_OUTPUT_DIR = os.environ.get("PRINTER_OUTPUT_DIR") or None
