# Overview: Receipt printing behind a swappable backend (CUPS or file export).

"""
Receipt printing.

The command layer only talks to a PrinterBackend: submit a receipt, list
printers, pick a default. CupsPrinterBackend shells out to `lp` / `lpstat`;
FilePrinterBackend writes the rendered receipt to a directory instead.

Money on receipts is integer minor units, rendered with two decimals.
"""
from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..time_utils import parse_iso_datetime, utcnow
from ..validation import ValidationError, require_int, require_string

RECEIPT_WIDTH = 48

PRINT_OK_MESSAGE = "Receipt printed successfully"


class PrinterError(Exception):
    """The print spooler or output target could not be used."""


@dataclass(frozen=True)
class ReceiptItem:
    name: str
    quantity: int
    price: int  # minor units, per unit

    @property
    def line_total(self) -> int:
        return self.quantity * self.price


@dataclass(frozen=True)
class Receipt:
    business_name: str
    items: list[ReceiptItem]
    subtotal: int
    tax: int
    discount: int
    total: int
    currency: str
    address: Optional[str] = None
    phone: Optional[str] = None
    receipt_number: Optional[str] = None
    date: datetime = field(default_factory=utcnow)

    @classmethod
    def from_dict(cls, data: dict) -> "Receipt":
        if not isinstance(data, dict):
            raise ValidationError("receipt must be an object")

        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise ValidationError("items must be a list")

        items = []
        for raw in raw_items:
            if not isinstance(raw, dict):
                raise ValidationError("each item must be an object")
            items.append(ReceiptItem(
                name=require_string(raw, "name"),
                quantity=require_int(raw, "quantity", minimum=1),
                price=require_int(raw, "price", minimum=0),
            ))

        try:
            date = parse_iso_datetime(data.get("date")) or utcnow()
        except (TypeError, ValueError, AttributeError):
            raise ValidationError("date must be an ISO-8601 datetime")

        return cls(
            business_name=require_string(data, "business_name"),
            items=items,
            subtotal=require_int(data, "subtotal", default=0),
            tax=require_int(data, "tax", default=0),
            discount=require_int(data, "discount", default=0),
            total=require_int(data, "total"),
            currency=str(data.get("currency") or ""),
            address=data.get("address") or None,
            phone=data.get("phone") or None,
            receipt_number=data.get("id") or data.get("receipt_number") or None,
            date=date,
        )


def format_amount(amount_minor: int, currency: str = "") -> str:
    sign = "-" if amount_minor < 0 else ""
    major, minor = divmod(abs(amount_minor), 100)
    return f"{sign}{currency}{major}.{minor:02d}"


def _pair(left: str, right: str, width: int) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def format_receipt(receipt: Receipt, width: int = RECEIPT_WIDTH) -> str:
    """Render a receipt as fixed-width text for a thermal printer."""
    rule = "-" * width
    lines = [receipt.business_name.center(width).rstrip()]
    if receipt.address:
        lines.append(receipt.address.center(width).rstrip())
    if receipt.phone:
        lines.append(f"Tel: {receipt.phone}".center(width).rstrip())
    lines.append(rule)
    lines.append(f"Date: {receipt.date.strftime('%Y-%m-%d %H:%M')}")
    if receipt.receipt_number:
        lines.append(f"Receipt: {receipt.receipt_number}")
    lines.append(rule)

    cur = receipt.currency
    for item in receipt.items:
        lines.append(item.name[:width])
        detail = f"  {item.quantity} x {format_amount(item.price, cur)}"
        lines.append(_pair(detail, format_amount(item.line_total, cur), width))

    lines.append(rule)
    lines.append(_pair("Subtotal", format_amount(receipt.subtotal, cur), width))
    if receipt.tax:
        lines.append(_pair("Tax", format_amount(receipt.tax, cur), width))
    if receipt.discount:
        lines.append(_pair("Discount", format_amount(-receipt.discount, cur), width))
    lines.append(_pair("TOTAL", format_amount(receipt.total, cur), width))
    lines.append(rule)
    lines.append("Thank you!".center(width).rstrip())
    return "\n".join(lines) + "\n"


class PrinterBackend:
    """Capability interface used by the print commands."""

    default_printer: Optional[str] = None

    def submit(self, receipt: Receipt) -> str:
        raise NotImplementedError

    def list_printers(self) -> list[str]:
        raise NotImplementedError

    def set_default(self, printer_name: str) -> str:
        self.default_printer = printer_name
        return f"Default printer set to: {printer_name}"


class CupsPrinterBackend(PrinterBackend):
    """Print through the CUPS command-line tools."""

    def __init__(self, default_printer: Optional[str] = None, timeout: float = 30.0):
        self.default_printer = default_printer
        self.timeout = timeout

    def submit(self, receipt: Receipt) -> str:
        cmd = ["lp"]
        if self.default_printer:
            cmd += ["-d", self.default_printer]
        cmd.append("-")

        try:
            subprocess.run(
                cmd,
                input=format_receipt(receipt),
                text=True,
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            raise PrinterError(f"Print failed: {(exc.stderr or '').strip() or exc}") from exc
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise PrinterError(f"Print failed: {exc}") from exc

        return f"{PRINT_OK_MESSAGE}. Total: {format_amount(receipt.total, receipt.currency)}"

    def list_printers(self) -> list[str]:
        try:
            proc = subprocess.run(
                ["lpstat", "-p"],
                text=True,
                capture_output=True,
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise PrinterError(f"Failed to get printers: {exc}") from exc

        # "printer NAME is idle.  enabled since ..."
        names = []
        for line in proc.stdout.splitlines():
            parts = line.split()
            if len(parts) >= 2 and parts[0] == "printer":
                names.append(parts[1])
        return names


class FilePrinterBackend(PrinterBackend):
    """Write rendered receipts to text files instead of a physical printer."""

    name = "file"

    def __init__(self, output_dir: str | Path):
        self.output_dir = Path(output_dir)

    def submit(self, receipt: Receipt) -> str:
        stamp = utcnow().strftime("%Y%m%dT%H%M%S%f")
        path = self.output_dir / f"receipt-{stamp}.txt"
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(format_receipt(receipt), encoding="utf-8")
        except OSError as exc:
            raise PrinterError(f"Print failed: {exc}") from exc
        return f"{PRINT_OK_MESSAGE}. Saved to {path}"

    def list_printers(self) -> list[str]:
        return [self.name]


def create_printer_backend(config: dict) -> PrinterBackend:
    kind = (config.get("PRINTER_BACKEND") or "cups").lower()
    if kind == "file":
        output_dir = config.get("PRINTER_OUTPUT_DIR")
        if not output_dir:
            raise ValueError("PRINTER_OUTPUT_DIR is required for the file printer backend")
        return FilePrinterBackend(output_dir)
    if kind == "cups":
        return CupsPrinterBackend(default_printer=config.get("PRINTER_NAME"))
    raise ValueError(f"Unknown PRINTER_BACKEND: {kind}")
