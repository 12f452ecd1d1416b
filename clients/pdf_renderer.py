"""
A4 tax-invoice PDF rendering with ReportLab.

Lays out the printed invoice: seller header, bill-to and invoice details,
item table, bank details, totals, terms and signature line. The built-in
Helvetica font has no rupee glyph, so amounts are printed as "Rs." with
Indian digit grouping.
"""

import logging
from dataclasses import dataclass
from io import BytesIO
from xml.sax.saxutils import escape as xml_escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.config import BusinessDetails
from core.exceptions import ExportError
from core.models import Invoice
from utils.currency import format_indian_number, format_inr

logger = logging.getLogger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
BRAND = colors.HexColor("#4F46E5")


@dataclass(frozen=True)
class ExportArtifact:
    """A rendered invoice ready to download, attach or share."""

    filename: str
    content: bytes
    media_type: str = PDF_MEDIA_TYPE


def artifact_filename(invoice: Invoice) -> str:
    return f"Invoice_{invoice.invoice_number}.pdf"


def _rs(value: float) -> str:
    return "Rs. " + format_inr(value, symbol=False)


def _quantity(value: float) -> str:
    return format_indian_number(int(value)) if float(value).is_integer() else str(value)


class PdfRenderer:
    """Render invoices to single-document A4 PDFs."""

    def __init__(self, business: BusinessDetails):
        self.business = business
        styles = getSampleStyleSheet()
        self._normal = styles["Normal"]
        self._title = ParagraphStyle("SellerName", parent=styles["Title"], alignment=0, textColor=BRAND)
        self._heading = ParagraphStyle("Heading", parent=styles["Heading4"], spaceAfter=2)
        self._small = ParagraphStyle("Small", parent=styles["Normal"], fontSize=8, leading=10)

    def _p(self, text: str, style: ParagraphStyle | None = None) -> Paragraph:
        return Paragraph(xml_escape(text), style or self._normal)

    def _header(self, invoice: Invoice) -> Table:
        b = self.business
        seller = [
            Paragraph(xml_escape(b.name), self._title),
            self._p(b.address, self._small),
            self._p(f"Ph: {b.phone1}, {b.phone2}", self._small),
            self._p(f"Email: {b.email}", self._small),
            self._p(f"GSTIN: {b.gstin}", self._small),
        ]
        meta = [
            Paragraph("<b>INVOICE</b>", self._heading),
            self._p(f"#{invoice.invoice_number}"),
            self._p(f"Date: {invoice.date}"),
        ]
        table = Table([[seller, meta]], colWidths=[120 * mm, 60 * mm])
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LINEBELOW", (0, 0), (-1, 0), 1, BRAND),
        ]))
        return table

    def _parties(self, invoice: Invoice) -> Table:
        c = invoice.customer
        billed = [Paragraph("<b>Billed To</b>", self._heading), self._p(c.name)]
        if c.address:
            billed.append(self._p(c.address, self._small))
        if c.phone:
            billed.append(self._p(f"Ph: {c.phone}", self._small))
        if c.email:
            billed.append(self._p(f"Email: {c.email}", self._small))

        details = [
            Paragraph("<b>Invoice Details</b>", self._heading),
            self._p(f"Status: {invoice.status.value}"),
            self._p(f"Due Date: {invoice.due_date}"),
            self._p(f"Place of Supply: {self.business.jurisdiction}"),
        ]
        table = Table([[billed, details]], colWidths=[110 * mm, 70 * mm])
        table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        return table

    def _items(self, invoice: Invoice) -> Table:
        rows = [["Item Description", "Qty", "Rate", "GST", "Amount"]]
        for item in invoice.items:
            rows.append([
                self._p(item.description),
                _quantity(item.quantity),
                _rs(item.rate),
                f"{item.gst_rate:g}%",
                _rs(item.amount),
            ])

        table = Table(rows, colWidths=[80 * mm, 20 * mm, 30 * mm, 20 * mm, 30 * mm], repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), BRAND),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.whitesmoke]),
            ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]))
        return table

    def _bank_and_totals(self, invoice: Invoice) -> Table:
        b = self.business
        bank = Table([
            ["Bank Name:", b.bank_name],
            ["Account No:", b.bank_account],
            ["IFSC Code:", b.bank_ifsc],
        ])
        bank.setStyle(TableStyle([("FONTSIZE", (0, 0), (-1, -1), 8)]))

        totals = Table(
            [
                ["Subtotal", _rs(invoice.subtotal)],
                ["GST Total", _rs(invoice.tax_total)],
                ["Grand Total", _rs(invoice.grand_total)],
            ],
            colWidths=[30 * mm, 40 * mm],
        )
        totals.setStyle(TableStyle([
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ("LINEABOVE", (0, -1), (-1, -1), 1, BRAND),
            ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ]))

        table = Table(
            [[[Paragraph("<b>Bank Details</b>", self._heading), bank], totals]],
            colWidths=[105 * mm, 75 * mm],
        )
        table.setStyle(TableStyle([("VALIGN", (0, 0), (-1, -1), "TOP")]))
        return table

    def _footer(self) -> Table:
        terms = [
            Paragraph("<b>Terms &amp; Conditions</b>", self._heading),
            self._p("Goods once sold will not be taken back.", self._small),
            self._p(f"Subject to {self.business.jurisdiction} Jurisdiction.", self._small),
        ]
        signature = [Spacer(1, 14 * mm), self._p("Authorized Signatory", self._small)]
        table = Table([[terms, signature]], colWidths=[120 * mm, 60 * mm])
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "BOTTOM"),
            ("LINEABOVE", (1, 0), (1, 0), 0.5, colors.grey),
        ]))
        return table

    def render(self, invoice: Invoice) -> ExportArtifact:
        """
        Render an invoice to PDF bytes.

        Raises:
            ExportError: ReportLab failed to lay out or write the document
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
            title=f"Invoice {invoice.invoice_number}",
            author=self.business.name,
        )

        elements = [
            self._header(invoice),
            Spacer(1, 8 * mm),
            self._parties(invoice),
            Spacer(1, 6 * mm),
            self._items(invoice),
            Spacer(1, 6 * mm),
            self._bank_and_totals(invoice),
        ]
        if invoice.notes:
            elements.append(Spacer(1, 4 * mm))
            elements.append(self._p(f"Notes: {invoice.notes}", self._small))
        elements.append(Spacer(1, 10 * mm))
        elements.append(self._footer())

        try:
            doc.build(elements)
        except Exception as e:
            raise ExportError(f"PDF rendering failed for {invoice.invoice_number}: {e}") from e

        return ExportArtifact(filename=artifact_filename(invoice), content=buffer.getvalue())
