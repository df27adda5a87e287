from __future__ import annotations

from ..extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Text, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)


class Supplier(db.Model):
    __tablename__ = "suppliers"

    id = db.Column(db.Text, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    contact_person = db.Column(db.Text)
    phone = db.Column(db.Text)
    email = db.Column(db.Text)
    address = db.Column(db.Text)
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)


class Product(db.Model):
    """
    Sellable item. Prices are integer minor units (cents).

    Foreign keys are declared for documentation; SQLite does not enforce
    them because the foreign_keys pragma is left off.
    """
    __tablename__ = "products"

    id = db.Column(db.Text, primary_key=True)
    name = db.Column(db.Text, nullable=False)
    sku = db.Column(db.Text, unique=True, nullable=False)
    description = db.Column(db.Text)

    price_minor = db.Column(db.Integer, nullable=False)
    cost_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))

    stock = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    low_stock_threshold = db.Column(db.Integer, nullable=False, server_default=db.text("5"))

    category_id = db.Column(db.Text, db.ForeignKey("categories.id"))
    supplier_id = db.Column(db.Text, db.ForeignKey("suppliers.id"))

    is_active = db.Column(db.Integer, nullable=False, server_default=db.text("1"))
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)
