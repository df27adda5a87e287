from __future__ import annotations

from ..extensions import db


class User(db.Model):
    """
    Operator accounts for login and attribution.

    Rows are written with raw SQL through the store; this declaration only
    describes the table. Identifiers are opaque strings supplied by the
    caller and timestamps are ISO-8601 text.
    """
    __tablename__ = "users"

    id = db.Column(db.Text, primary_key=True)
    username = db.Column(db.Text, unique=True, nullable=False)

    # bcrypt hash, never the plaintext
    password_hash = db.Column(db.Text, nullable=False)

    full_name = db.Column(db.Text, nullable=False)
    role = db.Column(db.Text, nullable=False, server_default="cashier")

    # 0/1 flag; disabled accounts cannot log in
    is_active = db.Column(db.Integer, nullable=False, server_default=db.text("1"))

    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)


# Columns safe to hand back to the shell
USER_PUBLIC_COLUMNS = ("id", "username", "full_name", "role", "is_active", "created_at", "updated_at")
