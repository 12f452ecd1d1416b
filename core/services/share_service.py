"""
Share service: get an invoice to the customer.

Builds the email and WhatsApp texts, the mailto: and wa.me links, writes
PDFs to the outbox folder, and sends PDFs through the email gateway when
one is configured. Sharing is best effort: failures come back as a
ShareResult carrying a message, never as an exception.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import quote

from clients.email_client import EmailGatewayClient, EmailGatewayError
from clients.pdf_renderer import ExportArtifact
from core.config import BusinessDetails
from core.exceptions import ShareError
from core.models import Invoice
from utils.currency import format_inr

logger = logging.getLogger(__name__)

SHARE_FAILED_MESSAGE = "Could not share automatically. Please download the PDF and share manually."


class ShareTarget(str, Enum):
    """Where an invoice can be sent."""

    EMAIL = "email"        # gateway email with the PDF attached
    MAILTO = "mailto"      # prefilled mail client link
    WHATSAPP = "whatsapp"  # wa.me deep link with prefilled text
    DOWNLOAD = "download"  # PDF written to the outbox folder


@dataclass(frozen=True)
class ShareMessage:
    recipient: str
    subject: str
    body: str


@dataclass(frozen=True)
class ShareResult:
    """Outcome of one share attempt. `url` and `path` are set when relevant."""

    target: ShareTarget
    ok: bool
    url: str | None = None
    path: str | None = None
    error: str | None = None


class ShareService:
    """Templated messages and share targets for invoices."""

    def __init__(
        self,
        business: BusinessDetails,
        outbox_dir: str | Path,
        email_client: EmailGatewayClient | None = None,
    ):
        self.business = business
        self.outbox_dir = Path(outbox_dir)
        self.email_client = email_client

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def email_message(self, invoice: Invoice) -> ShareMessage:
        """Subject and body for emailing an invoice to its customer."""
        shop = self.business.name
        subject = f"Invoice {invoice.invoice_number} - {shop}"
        body = (
            f"Dear {invoice.customer.name},\n\n"
            f"Please find attached invoice {invoice.invoice_number}.\n\n"
            f"Total Amount: {format_inr(invoice.grand_total)}\n\n"
            f"Thank you for your business.\n\n"
            f"Regards,\n{shop}"
        )
        return ShareMessage(recipient=invoice.customer.email, subject=subject, body=body)

    def whatsapp_text(self, invoice: Invoice) -> str:
        return (
            f"Hello {invoice.customer.name}, here is your invoice {invoice.invoice_number} "
            f"from {self.business.name} for Amount {format_inr(invoice.grand_total)}."
        )

    def mailto_url(self, invoice: Invoice) -> str:
        """mailto: link to the customer's email with subject and body filled in."""
        message = self.email_message(invoice)
        return (
            f"mailto:{message.recipient}"
            f"?subject={quote(message.subject, safe='')}"
            f"&body={quote(message.body, safe='')}"
        )

    def whatsapp_url(self, invoice: Invoice) -> str:
        """wa.me link to the customer's phone (digits only) with the text filled in."""
        phone = re.sub(r"\D", "", invoice.customer.phone)
        return f"https://wa.me/{phone}?text={quote(self.whatsapp_text(invoice), safe='')}"

    # -------------------------------------------------------------------------
    # Targets
    # -------------------------------------------------------------------------

    def _download(self, artifact: ExportArtifact) -> Path:
        self.outbox_dir.mkdir(parents=True, exist_ok=True)
        path = self.outbox_dir / artifact.filename
        path.write_bytes(artifact.content)
        logger.info(f"Saved {artifact.filename} to {self.outbox_dir}")
        return path

    def _email(self, invoice: Invoice, artifact: ExportArtifact) -> None:
        if self.email_client is None:
            raise ShareError("Email gateway is not configured")
        message = self.email_message(invoice)
        if not message.recipient:
            raise ShareError(f"Invoice {invoice.invoice_number} has no customer email")
        self.email_client.send_with_attachment(
            to=message.recipient,
            subject=message.subject,
            body=message.body,
            filename=artifact.filename,
            content=artifact.content,
            media_type=artifact.media_type,
        )

    def share(
        self,
        invoice: Invoice,
        target: ShareTarget,
        artifact: ExportArtifact | None = None,
    ) -> ShareResult:
        """
        Send an invoice to one target.

        Args:
            invoice: Invoice being shared
            target: Where to send it
            artifact: Rendered PDF; required for EMAIL and DOWNLOAD

        Returns:
            ShareResult; on failure ok is False and error holds
            SHARE_FAILED_MESSAGE
        """
        target = ShareTarget(target)
        try:
            if target == ShareTarget.MAILTO:
                return ShareResult(target=target, ok=True, url=self.mailto_url(invoice))

            if target == ShareTarget.WHATSAPP:
                return ShareResult(target=target, ok=True, url=self.whatsapp_url(invoice))

            if artifact is None:
                raise ShareError(f"Sharing by {target.value} needs a rendered PDF")

            if target == ShareTarget.DOWNLOAD:
                path = self._download(artifact)
                return ShareResult(target=target, ok=True, path=str(path))

            self._email(invoice, artifact)
            return ShareResult(target=target, ok=True)

        except (ShareError, EmailGatewayError, OSError, ValueError):
            logger.exception(f"Sharing {invoice.invoice_number} by {target.value} failed")
            return ShareResult(target=target, ok=False, error=SHARE_FAILED_MESSAGE)

    def send_pdf(self, invoice: Invoice, artifact: ExportArtifact) -> ShareResult:
        """
        Get the PDF to the customer by the best available route.

        Emails it through the gateway when one is configured and the customer
        has an email address. Otherwise, or when that fails, saves it to the
        outbox and returns a mailto: link so the user can attach it by hand.
        """
        if self.email_client is not None and invoice.customer.email:
            result = self.share(invoice, ShareTarget.EMAIL, artifact)
            if result.ok:
                return result
            logger.info(f"Falling back to download + mailto for {invoice.invoice_number}")

        download = self.share(invoice, ShareTarget.DOWNLOAD, artifact)
        if not download.ok:
            return download

        return ShareResult(
            target=ShareTarget.DOWNLOAD,
            ok=True,
            path=download.path,
            url=self.mailto_url(invoice),
        )
