from __future__ import annotations

from ..extensions import db


class Sale(db.Model):
    """
    Completed (or otherwise recorded) sale header.

    All amounts are integer minor units. sale_number is the human-readable
    receipt number and is unique across the store file.
    """
    __tablename__ = "sales"

    id = db.Column(db.Text, primary_key=True)
    sale_number = db.Column(db.Text, unique=True, nullable=False)
    customer_id = db.Column(db.Text, db.ForeignKey("customers.id"))
    user_id = db.Column(db.Text, db.ForeignKey("users.id"), nullable=False)

    total_minor = db.Column(db.Integer, nullable=False)
    tax_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    discount_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))

    payment_method = db.Column(db.Text, nullable=False)
    status = db.Column(db.Text, nullable=False, server_default="completed")
    notes = db.Column(db.Text)

    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)


class SaleItem(db.Model):
    __tablename__ = "sale_items"

    id = db.Column(db.Text, primary_key=True)
    sale_id = db.Column(db.Text, db.ForeignKey("sales.id"), nullable=False)
    product_id = db.Column(db.Text, db.ForeignKey("products.id"), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    price_minor = db.Column(db.Integer, nullable=False)
    total_minor = db.Column(db.Integer, nullable=False)
