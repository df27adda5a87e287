from __future__ import annotations

from ..extensions import db


class Expense(db.Model):
    __tablename__ = "expenses"

    id = db.Column(db.Text, primary_key=True)
    category = db.Column(db.Text, nullable=False)
    description = db.Column(db.Text, nullable=False)
    amount_minor = db.Column(db.Integer, nullable=False)
    supplier_id = db.Column(db.Text, db.ForeignKey("suppliers.id"))
    user_id = db.Column(db.Text, db.ForeignKey("users.id"), nullable=False)
    receipt_number = db.Column(db.Text)
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)


class Shift(db.Model):
    """
    Cashier shift with opening/closing cash counts.

    ending_cash_minor and end_time stay NULL while status is 'open'.
    """
    __tablename__ = "shifts"

    id = db.Column(db.Text, primary_key=True)
    user_id = db.Column(db.Text, db.ForeignKey("users.id"), nullable=False)
    start_time = db.Column(db.Text, nullable=False)
    end_time = db.Column(db.Text)

    starting_cash_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    ending_cash_minor = db.Column(db.Integer)
    total_sales_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))
    total_expenses_minor = db.Column(db.Integer, nullable=False, server_default=db.text("0"))

    status = db.Column(db.Text, nullable=False, server_default="open")
    notes = db.Column(db.Text)
    created_at = db.Column(db.Text, nullable=False)
    updated_at = db.Column(db.Text)
