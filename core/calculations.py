"""
GST arithmetic for invoice line items and invoice totals.

Pure functions, no side effects, no rounding. Amounts are full-precision
floats in rupees; rounding to paise happens only when formatting for display.

Negative inputs are not rejected here. Range checks belong to the models
that feed these functions.
"""

from dataclasses import dataclass
from typing import Iterable, Protocol


class PricedLine(Protocol):
    """Anything with the three inputs of a GST line (an InvoiceItem, usually)."""

    quantity: float
    rate: float
    gst_rate: float


@dataclass(frozen=True)
class InvoiceTotals:
    """Document-level totals derived from an item list."""

    subtotal: float = 0.0
    tax_total: float = 0.0
    grand_total: float = 0.0


def compute_item_amount(quantity: float, rate: float, gst_rate: float) -> float:
    """
    Line amount including GST.

    amount = quantity*rate + quantity*rate*gst_rate/100
    """
    base = quantity * rate
    return base + base * gst_rate / 100


def compute_invoice_totals(items: Iterable[PricedLine]) -> InvoiceTotals:
    """
    Subtotal, tax and grand total over a list of lines.

    subtotal = Σ quantity*rate
    tax_total = Σ quantity*rate*gst_rate/100
    grand_total = subtotal + tax_total

    An empty list yields all zeros.
    """
    subtotal = 0.0
    tax_total = 0.0
    for item in items:
        base = item.quantity * item.rate
        subtotal += base
        tax_total += base * item.gst_rate / 100

    return InvoiceTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        grand_total=subtotal + tax_total,
    )
