"""
Export service: invoice -> downloadable PDF, or a message saying why not.

Rendering failures stop here. They are logged and returned as a
user-facing message pointing at the manual fallback; nothing in the
application state changes.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from clients.pdf_renderer import ExportArtifact
from core.exceptions import ExportError
from core.models import Invoice

logger = logging.getLogger(__name__)

EXPORT_FAILED_MESSAGE = "Failed to generate PDF. Please try using Print -> Save as PDF."


class InvoiceRenderer(Protocol):
    def render(self, invoice: Invoice) -> ExportArtifact: ...


@dataclass(frozen=True)
class ExportResult:
    """Either an artifact or an error message, never both."""

    artifact: ExportArtifact | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.artifact is not None


class ExportService:
    """Wraps a renderer so callers get results instead of exceptions."""

    def __init__(self, renderer: InvoiceRenderer):
        self.renderer = renderer

    def export(self, invoice: Invoice) -> ExportResult:
        """
        Render an invoice.

        Returns:
            ExportResult with the artifact, or with EXPORT_FAILED_MESSAGE
        """
        try:
            artifact = self.renderer.render(invoice)
        except ExportError:
            logger.exception(f"PDF generation failed for {invoice.invoice_number}")
            return ExportResult(error=EXPORT_FAILED_MESSAGE)

        logger.info(f"Rendered {artifact.filename} ({len(artifact.content)} bytes)")
        return ExportResult(artifact=artifact)
