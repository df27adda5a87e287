from __future__ import annotations

from ..extensions import db


class Customer(db.Model):
    __tablename__ = "customers"

    id = db.Column(db.Text, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    phone = db.Column(db.Text)
    email = db.Column(db.Text)
    address = db.Column(db.Text)
    loyalty_points = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)
