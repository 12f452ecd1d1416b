"""Core domain models."""

from core.models.customer import Customer
from core.models.invoice import GST_RATES, Invoice, InvoiceItem, InvoiceStatus, validate_gst_rate

__all__ = [
    # Customer
    "Customer",
    # Invoice
    "GST_RATES", "Invoice", "InvoiceItem", "InvoiceStatus", "validate_gst_rate",
]
