# Overview: Service-layer operations for auth; encapsulates credential checks and user records.

"""
Authentication Service

Uses bcrypt for password hashing. The cost factor is fixed per process
(PASSWORD_HASH_ROUNDS, default 12); tests lower it to keep runs fast.

SECURITY NOTES:
- Plaintext passwords are never stored, logged, or echoed in errors
- Unknown usernames and wrong passwords produce the same message
- Disabled accounts are rejected before the password is checked
"""
from __future__ import annotations

from functools import lru_cache

import bcrypt
from flask import current_app, has_app_context

from ..models import USER_PUBLIC_COLUMNS
from ..store import PosStore
from ..time_utils import utcnow_iso
from ..validation import ValidationError, require_fields

DEFAULT_HASH_ROUNDS = 12

DEFAULT_ROLE = "cashier"

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password"

USER_REQUIRED_FIELDS = ("id", "username", "password", "full_name")

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


class AuthenticationError(Exception):
    """Credentials did not match an active account."""


class AccountDisabledError(AuthenticationError):
    """The account exists but is_active is not 1."""


class PasswordHashError(Exception):
    """bcrypt could not hash or verify a password."""


def _hash_rounds() -> int:
    if has_app_context():
        return int(current_app.config.get("PASSWORD_HASH_ROUNDS", DEFAULT_HASH_ROUNDS))
    return DEFAULT_HASH_ROUNDS


def _too_long(password: str) -> bool:
    return len(password.encode('utf-8')) > MAX_PASSWORD_BYTES


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> bytes:
    """Hash compared against when the username is unknown."""
    return bcrypt.hashpw(b"glasspos-no-such-user", bcrypt.gensalt(rounds=rounds))


def is_active_flag(value) -> bool:
    """
    Read users.is_active. Only 1 (integer or text) means active; anything
    else a caller may have written (0, NULL, 'false', ...) means disabled.
    """
    if isinstance(value, str):
        return value.strip() == "1"
    return not isinstance(value, bool) and value == 1


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash password using bcrypt.

    Raises PasswordHashError if bcrypt rejects the input. Passwords longer
    than 72 bytes are refused here rather than silently truncated.
    """
    if _too_long(password):
        raise PasswordHashError(f"Failed to hash password: password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    try:
        salt = bcrypt.gensalt(rounds=rounds or _hash_rounds())
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    except ValueError as exc:
        raise PasswordHashError(f"Failed to hash password: {exc}") from exc
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    bcrypt.checkpw() compares in constant time. A stored value that is not a
    bcrypt hash raises PasswordHashError instead of silently failing.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError as exc:
        raise PasswordHashError(f"Failed to verify password: {exc}") from exc


def public_profile(row: dict) -> dict:
    return {
        "id": row["id"],
        "username": row["username"],
        "full_name": row["full_name"],
        "role": row["role"],
    }


def login(store: PosStore, username: str, password: str) -> dict:
    """
    Authenticate user with username and password.

    Returns the public profile {id, username, full_name, role}.

    Raises:
        AuthenticationError: unknown username or wrong password (same message)
        AccountDisabledError: account exists but is not active
        PasswordHashError: stored hash is unreadable
    """
    # No stored hash can match a password bcrypt would refuse
    if _too_long(password):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    rows = store.query_rows(
        "SELECT id, username, password_hash, full_name, role, is_active FROM users WHERE username = ?",
        [username],
    )
    if not rows:
        # Same bcrypt work as a real check so timing does not reveal usernames
        bcrypt.checkpw(password.encode('utf-8'), _dummy_hash(_hash_rounds()))
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    user = rows[0]

    # Disabled accounts are refused even with the right password
    if not is_active_flag(user["is_active"]):
        raise AccountDisabledError("Account is disabled")

    if not verify_password(password, user["password_hash"]):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

    return public_profile(user)


def create_user(store: PosStore, payload: dict) -> dict:
    """
    Create a user with a bcrypt-hashed password.

    Required: id, username, password, full_name. role defaults to "cashier".
    Missing fields raise ValidationError before the store is touched; a
    duplicate username surfaces as the store's UNIQUE constraint error.
    """
    if not isinstance(payload, dict):
        raise ValidationError("User payload must be an object")

    require_fields(payload, USER_REQUIRED_FIELDS)

    role = str(payload.get("role") or DEFAULT_ROLE).strip()
    user = {
        "id": str(payload["id"]).strip(),
        "username": str(payload["username"]).strip(),
        "full_name": str(payload["full_name"]).strip(),
        "role": role,
    }

    password_hash = hash_password(str(payload["password"]))

    store.execute(
        """
        INSERT INTO users (id, username, password_hash, full_name, role, is_active, created_at)
        VALUES (?, ?, ?, ?, ?, 1, ?)
        """,
        [user["id"], user["username"], password_hash, user["full_name"], user["role"], utcnow_iso()],
    )
    return user


def list_users(store: PosStore) -> list[dict]:
    """All users without password hashes, oldest first."""
    columns = ", ".join(USER_PUBLIC_COLUMNS)
    return store.query_rows(f"SELECT {columns} FROM users ORDER BY created_at, username")
