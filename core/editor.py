"""
In-memory editing of an unsaved invoice.

The editor owns a private copy of the invoice being created or edited.
Nothing here touches storage; the controller decides when a draft is saved
or thrown away. Item amounts and invoice totals are computed fields on the
models, so every mutation below (add, edit, remove) leaves them consistent
with the current items.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from core.models import Invoice, InvoiceItem, InvoiceStatus
from core.services.invoice_store import InvoiceStore

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = frozenset({"name", "phone", "email", "address"})
INVOICE_FIELDS = frozenset({"date", "due_date", "status", "notes"})
ITEM_FIELDS = frozenset({"description", "quantity", "rate", "gst_rate"})

# Persisted/camelCase spellings accepted from callers
_FIELD_ALIASES = {"dueDate": "due_date", "gstRate": "gst_rate"}

MISSING_CUSTOMER_NAME = "Please enter customer name"
MISSING_ITEMS = "Please add at least one item"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the save gate."""

    violations: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations


def _canonical(name: str, allowed: frozenset[str], kind: str) -> str:
    name = _FIELD_ALIASES.get(name, name)
    if name not in allowed:
        raise ValueError(
            f"Unknown {kind} field '{name}'. Allowed: {', '.join(sorted(allowed))}"
        )
    return name


class InvoiceEditor:
    """
    Draft state for the create/edit form.

    Usage:
        editor = InvoiceEditor(store.create_empty(), is_new=True)
        item = editor.add_item()
        editor.update_item(item.id, "rate", 100)
        editor.set_customer_field("name", "Ravi")
        if editor.validate().ok:
            store.save(editor.invoice)
    """

    def __init__(self, invoice: Invoice, is_new: bool, new_item_gst_rate: float = 18):
        """
        Args:
            invoice: Starting point. Copied, so the caller's object is untouched.
            is_new: True when creating, False when editing a stored invoice.
            new_item_gst_rate: GST rate given to items added with add_item().
        """
        self.invoice = invoice.model_copy(deep=True)
        self.is_new = is_new
        self.new_item_gst_rate = new_item_gst_rate

    def set_customer_field(self, name: str, value: str) -> Invoice:
        """Set one of name/phone/email/address on the bill-to customer."""
        name = _canonical(name, CUSTOMER_FIELDS, "customer")
        setattr(self.invoice.customer, name, value)
        return self.invoice

    def set_field(self, name: str, value: Any) -> Invoice:
        """
        Set date, due_date, status or notes.

        Raises:
            ValueError: Unknown field, malformed date, or unknown status
        """
        name = _canonical(name, INVOICE_FIELDS, "invoice")
        if name == "status":
            value = InvoiceStatus(value)
        setattr(self.invoice, name, value)
        return self.invoice

    def add_item(self) -> InvoiceItem:
        """Append a blank line: quantity 1, rate 0, default GST rate."""
        item = InvoiceItem(
            id=InvoiceStore.generate_id(),
            description="",
            quantity=1,
            rate=0,
            gst_rate=self.new_item_gst_rate,
        )
        self.invoice.items = [*self.invoice.items, item]
        return item

    def update_item(self, item_id: str, name: str, value: Any) -> InvoiceItem:
        """
        Change one input of a line item.

        The item's amount is recalculated from its current quantity, rate and
        GST rate, whichever of them was just changed.

        Raises:
            ValueError: Unknown item id or field, or a rejected value
                (negative quantity/rate, GST rate outside the slabs)
        """
        name = _canonical(name, ITEM_FIELDS, "item")
        item = self.invoice.find_item(item_id)
        if item is None:
            raise ValueError(f"Item {item_id} not found")
        setattr(item, name, value)
        return item

    def remove_item(self, item_id: str) -> bool:
        """
        Drop a line item.

        Returns True if removed, False if no item had that id.
        """
        before = len(self.invoice.items)
        self.invoice.items = [i for i in self.invoice.items if i.id != item_id]
        return len(self.invoice.items) < before

    def validate(self) -> ValidationResult:
        """
        Save gate: the customer needs a name and the invoice at least one item.
        """
        violations = []
        if not self.invoice.customer.name.strip():
            violations.append(MISSING_CUSTOMER_NAME)
        if not self.invoice.items:
            violations.append(MISSING_ITEMS)
        if violations:
            logger.info(f"Invoice {self.invoice.invoice_number} failed validation: {violations}")
        return ValidationResult(violations=violations)
