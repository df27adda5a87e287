# Overview: Service-layer operations for default data; seeds the admin account and fallback category.

"""
Default-data seeding.

Each seed step checks for its row and inserts it only when the lookup
returns no rows. Check and insert happen inside one guarded acquisition,
so two processes racing on the same file cannot both insert.

SECURITY: the default admin password is documented and must be changed
after installation.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from ..store import PosStore, StoreError, store_error_from
from ..time_utils import utcnow_iso
from .auth_service import PasswordHashError, hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_ID = "admin-001"
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_ADMIN_FULL_NAME = "System Administrator"

DEFAULT_CATEGORY_ID = "cat-001"
DEFAULT_CATEGORY_NAME = "General"
DEFAULT_CATEGORY_DESCRIPTION = "Default category for products"


class SeedError(StoreError):
    """A seed step failed for a reason other than 'no rows'."""


def seed_admin(store: PosStore) -> bool:
    """
    Ensure the default administrator exists.

    Returns True if the row was created, False if it was already there.
    """
    try:
        with store.acquire() as conn:
            existing = conn.exec_driver_sql(
                "SELECT id FROM users WHERE username = ?", (DEFAULT_ADMIN_USERNAME,)
            ).first()
            if existing is not None:
                logger.info("Admin user already exists")
                return False

            password_hash = hash_password(DEFAULT_ADMIN_PASSWORD)
            conn.exec_driver_sql(
                """
                INSERT INTO users (id, username, password_hash, full_name, role, is_active, created_at)
                VALUES (?, ?, ?, ?, ?, 1, ?)
                """,
                (
                    DEFAULT_ADMIN_ID,
                    DEFAULT_ADMIN_USERNAME,
                    password_hash,
                    DEFAULT_ADMIN_FULL_NAME,
                    "admin",
                    utcnow_iso(),
                ),
            )
    except SQLAlchemyError as exc:
        raise SeedError(f"Failed to seed admin user: {store_error_from(exc)}") from exc
    except PasswordHashError as exc:
        raise SeedError(str(exc)) from exc

    logger.info("Default admin user created (username: %s)", DEFAULT_ADMIN_USERNAME)
    return True


def seed_default_category(store: PosStore) -> bool:
    """
    Ensure the fallback "General" category exists.

    Returns True if the row was created, False if it was already there.
    """
    try:
        with store.acquire() as conn:
            existing = conn.exec_driver_sql(
                "SELECT id FROM categories WHERE name = ?", (DEFAULT_CATEGORY_NAME,)
            ).first()
            if existing is not None:
                logger.info("Default category already exists")
                return False

            conn.exec_driver_sql(
                "INSERT INTO categories (id, name, description, created_at) VALUES (?, ?, ?, ?)",
                (DEFAULT_CATEGORY_ID, DEFAULT_CATEGORY_NAME, DEFAULT_CATEGORY_DESCRIPTION, utcnow_iso()),
            )
    except SQLAlchemyError as exc:
        raise SeedError(f"Failed to seed default category: {store_error_from(exc)}") from exc

    logger.info("Default category created")
    return True


SEED_STEPS = (
    ("admin", seed_admin),
    ("category", seed_default_category),
)


def seed_defaults(store: PosStore, steps=SEED_STEPS) -> dict[str, str | None]:
    """
    Run every seed step independently.

    A failing step is logged and reported in the result (name -> error
    message, None on success) but never stops the remaining steps.
    """
    outcome: dict[str, str | None] = {}
    for name, step in steps:
        try:
            step(store)
            outcome[name] = None
        except SeedError as exc:
            logger.warning("Seed step %s failed: %s", name, exc)
            outcome[name] = str(exc)
    return outcome
