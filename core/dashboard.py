"""Dashboard figures over the invoice list."""

from dataclasses import dataclass
from typing import Iterable

from core.models import Invoice, InvoiceStatus

_OUTSTANDING = (InvoiceStatus.PENDING, InvoiceStatus.OVERDUE)


@dataclass(frozen=True)
class DashboardSummary:
    total_revenue: float
    pending_amount: float
    total_invoices: int


def summarize(invoices: Iterable[Invoice]) -> DashboardSummary:
    """
    Revenue is the grand total of Paid invoices; pending is Pending plus
    Overdue. Drafts count only toward the invoice total.
    """
    revenue = 0.0
    pending = 0.0
    count = 0
    for invoice in invoices:
        count += 1
        if invoice.status == InvoiceStatus.PAID:
            revenue += invoice.grand_total
        elif invoice.status in _OUTSTANDING:
            pending += invoice.grand_total

    return DashboardSummary(total_revenue=revenue, pending_amount=pending, total_invoices=count)
