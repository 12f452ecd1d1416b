"""Shared test fixtures for the invoicing test suite."""

import pytest

from clients.file_storage_client import FileStorageClient
from core.controller import InvoiceController
from core.models import Customer, Invoice, InvoiceItem, InvoiceStatus
from core.services.invoice_store import InvoiceStore


# =============================================================================
# STORAGE FIXTURES
# =============================================================================


@pytest.fixture
def storage(tmp_path):
    """File-backed key-value storage in a per-test temp dir."""
    return FileStorageClient(tmp_path / "data" / "invoices.json")


@pytest.fixture
def store(storage):
    return InvoiceStore(storage)


@pytest.fixture
def controller(store):
    return InvoiceController(store)


# =============================================================================
# INVOICE FACTORIES
# =============================================================================


def _make_item(item_id="item-1", quantity=2, rate=100, gst_rate=18, description="Teak chair"):
    return InvoiceItem(
        id=item_id,
        description=description,
        quantity=quantity,
        rate=rate,
        gst_rate=gst_rate,
    )


def _make_invoice(
    invoice_id="inv-1",
    number="AF-25-001",
    status=InvoiceStatus.PENDING,
    items=None,
    customer_name="Ravi Sharma",
    **kwargs,
):
    return Invoice(
        id=invoice_id,
        invoice_number=number,
        date="2025-03-01",
        due_date="2025-03-15",
        status=status,
        customer=Customer(
            name=customer_name,
            phone="+91 98765 43210",
            email="ravi@example.com",
            address="MP Nagar, Bhopal",
        ),
        items=[_make_item()] if items is None else items,
        **kwargs,
    )


@pytest.fixture
def make_item():
    """Factory for InvoiceItem with overridable fields."""
    return _make_item


@pytest.fixture
def make_invoice():
    """Factory for a saved-looking Invoice with overridable fields."""
    return _make_invoice


@pytest.fixture
def sample_invoice():
    """2 × ₹100 at 18% GST: subtotal 200, tax 36, total 236."""
    return _make_invoice()
