"""
Invoice lifecycle controller.

Tracks which screen the user is on (list, create, edit, view), the cached
invoice list, the selected invoice and the open draft, and routes every
mutation through the store.

Two rules hold after every save or delete:
- The cached list is re-read from the store, never patched in memory, so it
  always shows what is actually persisted.
- Deleting the invoice that is open (viewed or being edited) returns to the
  list with nothing selected.

Confirmation and validation are explicit values, not dialogs: save() returns
a ValidationResult and delete() takes `confirmed`.
"""

import logging
from enum import Enum

from core.dashboard import DashboardSummary, summarize
from core.editor import InvoiceEditor, ValidationResult
from core.exceptions import InvalidTransitionError, InvoiceNotFoundError
from core.models import Invoice
from core.services.invoice_store import InvoiceStore

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    """Screen the user is on."""

    LIST = "list"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"


_EDITING = (ViewMode.CREATE, ViewMode.EDIT)


class InvoiceController:
    """State machine for one user session."""

    def __init__(self, store: InvoiceStore, new_item_gst_rate: float = 18):
        self.store = store
        self.new_item_gst_rate = new_item_gst_rate

        self.mode = ViewMode.LIST
        self.invoices: list[Invoice] = []
        self.selected: Invoice | None = None
        self.editor: InvoiceEditor | None = None

        self.refresh()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @property
    def is_editing(self) -> bool:
        return self.mode in _EDITING

    def _require(self, action: str, *modes: ViewMode) -> None:
        if self.mode not in modes:
            raise InvalidTransitionError(action, self.mode.value)

    def _find(self, invoice_id: str) -> Invoice:
        for invoice in self.invoices:
            if invoice.id == invoice_id:
                return invoice
        raise InvoiceNotFoundError(invoice_id)

    def _to_list(self) -> None:
        self.mode = ViewMode.LIST
        self.selected = None
        self.editor = None

    def refresh(self) -> list[Invoice]:
        """Reload the cached list from the store."""
        self.invoices = self.store.list_all()
        return self.invoices

    def summary(self) -> DashboardSummary:
        """Dashboard figures for the cached list."""
        return summarize(self.invoices)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def create(self) -> InvoiceEditor:
        """List -> create, with a fresh empty draft and no selection."""
        self._require("create", ViewMode.LIST)
        self.selected = None
        self.editor = InvoiceEditor(
            self.store.create_empty(), is_new=True, new_item_gst_rate=self.new_item_gst_rate
        )
        self.mode = ViewMode.CREATE
        return self.editor

    def edit(self, invoice_id: str) -> InvoiceEditor:
        """
        List -> edit, with a draft copy of a stored invoice.

        Raises:
            InvalidTransitionError: Not on the list
            InvoiceNotFoundError: Unknown id
        """
        self._require("edit", ViewMode.LIST)
        invoice = self._find(invoice_id)
        self.selected = invoice
        self.editor = InvoiceEditor(
            invoice, is_new=False, new_item_gst_rate=self.new_item_gst_rate
        )
        self.mode = ViewMode.EDIT
        return self.editor

    def view(self, invoice_id: str) -> Invoice:
        """
        List -> view.

        Raises:
            InvalidTransitionError: Not on the list
            InvoiceNotFoundError: Unknown id
        """
        self._require("view", ViewMode.LIST)
        self.selected = self._find(invoice_id)
        self.mode = ViewMode.VIEW
        return self.selected

    def back(self) -> None:
        """Return to the list from anywhere. An open draft is discarded."""
        self._to_list()

    def cancel(self) -> None:
        """
        Editing -> list without saving.

        Raises:
            InvalidTransitionError: No draft open
        """
        self._require("cancel", *_EDITING)
        logger.info(f"Discarded draft {self.editor.invoice.invoice_number}")
        self._to_list()

    def save(self) -> ValidationResult:
        """
        Persist the open draft and return to the list.

        When validation fails nothing is written and the draft stays open so
        the user can fix it.

        Raises:
            InvalidTransitionError: No draft open
        """
        self._require("save", *_EDITING)

        result = self.editor.validate()
        if not result.ok:
            return result

        self.store.save(self.editor.invoice)
        self.refresh()
        self._to_list()
        return result

    def delete(self, invoice_id: str, confirmed: bool) -> bool:
        """
        Delete an invoice from any screen, once the user has confirmed.

        Args:
            invoice_id: Invoice to remove. An id that is not stored is fine.
            confirmed: The user's answer to "are you sure?"

        Returns:
            False if not confirmed (nothing changed), True once the delete
            has been carried out.
        """
        if not confirmed:
            return False

        self.store.delete(invoice_id)
        self.refresh()

        open_ids = set()
        if self.selected is not None:
            open_ids.add(self.selected.id)
        if self.editor is not None:
            open_ids.add(self.editor.invoice.id)
        if invoice_id in open_ids:
            self._to_list()

        return True

    # -------------------------------------------------------------------------
    # Read model
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Serializable view state for the front end."""
        return {
            "mode": self.mode.value,
            "selected": self.selected.to_document() if self.selected else None,
            "draft": self.editor.invoice.to_document() if self.editor else None,
            "isNew": self.editor.is_new if self.editor else None,
        }
