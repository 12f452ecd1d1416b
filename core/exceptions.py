"""Typed exceptions for invoice lifecycle, export and sharing failures."""


class InvoiceError(ValueError):
    """Base class for invoicing errors."""


class InvoiceNotFoundError(InvoiceError):
    """No stored invoice has the requested id."""

    def __init__(self, invoice_id: str):
        self.invoice_id = invoice_id
        super().__init__(f"Invoice {invoice_id} not found")


class InvalidTransitionError(InvoiceError):
    """The requested action is not available in the current view."""

    def __init__(self, action: str, mode: str):
        self.action = action
        self.mode = mode
        super().__init__(f"Cannot {action} while in {mode} view")


class ValidationFailedError(InvoiceError):
    """
    Save gate rejected the draft.

    The controller returns a ValidationResult instead of raising; the HTTP
    layer raises this to turn a rejected save into an error response.
    """

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class ExportError(InvoiceError):
    """Rendering an invoice to PDF failed."""


class ShareError(InvoiceError):
    """Handing an invoice to a share target failed."""
