"""
Invoice arithmetic.

Line extended amounts, subtotal, VAT and total. Pure functions over the
caller's lines; nothing here touches the database. Values are plain floats
and are not rounded - rounding happens only when formatting for display.
"""

from dataclasses import dataclass
from typing import Iterable

from core.models import InvoiceLineCreate

VAT_RATE = 0.15


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived money values persisted on an invoice."""

    subtotal: float
    vat_amount: float
    total_amount: float


def extended_amount(quantity: int, unit_price: float) -> float:
    """Line total: quantity x unit price."""
    return quantity * unit_price


def compute_totals(lines: Iterable[InvoiceLineCreate], vat_rate: float = VAT_RATE) -> InvoiceTotals:
    """
    Compute invoice totals from its lines.

    Args:
        lines: Invoice lines in entry order
        vat_rate: VAT as a fraction of subtotal (0.15 = 15%)

    Returns:
        InvoiceTotals with subtotal, vat_amount and total_amount
    """
    subtotal = 0.0
    for line in lines:
        subtotal += extended_amount(line.quantity, line.unit_price)

    vat_amount = subtotal * vat_rate
    return InvoiceTotals(
        subtotal=subtotal,
        vat_amount=vat_amount,
        total_amount=subtotal + vat_amount,
    )
