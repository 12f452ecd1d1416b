"""
Invoice store: the durable invoice collection.

All invoices live in one storage slot as a JSON array, newest first. Every
mutation reads the whole collection, changes it, and writes it back in a
single set. Reads never fail: unreadable data is logged and treated as an
empty collection.
"""

import logging
import secrets
import string
import time

from clients.base import KeyValueStorage
from core.models import Customer, Invoice, InvoiceStatus
from utils.timezone import today_iso, two_digit_year

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


class InvoiceStore:
    """Create/read/update/delete for invoices in a key-value storage slot."""

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = "aakash_furniture_invoices",
        invoice_prefix: str = "AF",
    ):
        self.storage = storage
        self.storage_key = storage_key
        self.invoice_prefix = invoice_prefix

    @property
    def sequence_key(self) -> str:
        """Key of the persisted invoice-number counter."""
        return f"{self.storage_key}:seq"

    @staticmethod
    def generate_id() -> str:
        """
        Opaque identifier: base-36 milliseconds plus a random base-36 tail.

        Unique with overwhelming probability; collisions are not checked.
        """
        millis = int(time.time() * 1000)
        return _to_base36(millis) + _to_base36(secrets.randbits(52))

    def _highest_issued_sequence(self, invoices: list[Invoice]) -> int:
        highest = 0
        for invoice in invoices:
            try:
                highest = max(highest, int(invoice.invoice_number.rsplit("-", 1)[-1]))
            except ValueError:
                continue
        return highest

    def generate_invoice_number(self) -> str:
        """
        Next human-facing number, e.g. AF-25-007.

        Sequences come from a persisted counter so a number is never issued
        twice, even after deletions. The counter is seeded on first use from
        the invoices already stored. The year part is the current two-digit
        year; the sequence does not reset per year.
        """
        if not self.storage.exists(self.sequence_key):
            invoices = self.list_all()
            seed = max(len(invoices), self._highest_issued_sequence(invoices))
            self.storage.set(self.sequence_key, str(seed))

        sequence = self.storage.incr(self.sequence_key)
        return f"{self.invoice_prefix}-{two_digit_year()}-{sequence:03d}"

    def list_all(self) -> list[Invoice]:
        """
        All stored invoices, newest first.

        Returns an empty list when nothing is stored yet, and also when the
        stored data cannot be read or parsed (logged, never raised).
        """
        try:
            documents = self.storage.get_json(self.storage_key)
            if documents is None:
                return []
            if not isinstance(documents, list):
                raise ValueError(f"Expected a list under '{self.storage_key}'")
            return [Invoice.model_validate(doc) for doc in documents]
        except Exception:
            logger.exception("Failed to load invoices")
            return []

    def get_by_id(self, invoice_id: str) -> Invoice | None:
        """
        Get invoice by ID.

        Returns:
            Invoice if found, None otherwise.
        """
        for invoice in self.list_all():
            if invoice.id == invoice_id:
                return invoice
        return None

    def _write(self, invoices: list[Invoice]) -> None:
        self.storage.set_json(self.storage_key, [i.to_document() for i in invoices])

    def save(self, invoice: Invoice) -> Invoice:
        """
        Insert or replace an invoice.

        An invoice whose id is already stored replaces it in place (its
        position is kept). A new invoice goes to the front.

        Raises whatever the storage backend raises on write.
        """
        invoices = self.list_all()

        for index, existing in enumerate(invoices):
            if existing.id == invoice.id:
                invoices[index] = invoice
                logger.info(f"Invoice {invoice.invoice_number} updated")
                break
        else:
            invoices.insert(0, invoice)
            logger.info(f"Invoice {invoice.invoice_number} created")

        self._write(invoices)
        return invoice

    def delete(self, invoice_id: str) -> bool:
        """
        Remove an invoice by id.

        Returns:
            True if an invoice was removed, False if none had that id.
            A missing id is not an error; the collection is left as is.
        """
        invoices = self.list_all()
        remaining = [i for i in invoices if i.id != invoice_id]

        self._write(remaining)

        deleted = len(remaining) < len(invoices)
        if deleted:
            logger.info(f"Invoice {invoice_id} deleted")
        return deleted

    def create_empty(self) -> Invoice:
        """
        A new unsaved invoice: fresh id and number, dated today, Pending,
        blank customer, no items.
        """
        today = today_iso()
        return Invoice(
            id=self.generate_id(),
            invoice_number=self.generate_invoice_number(),
            date=today,
            due_date=today,
            status=InvoiceStatus.PENDING,
            customer=Customer(),
            items=[],
        )
