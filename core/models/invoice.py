"""Invoice domain models.

Amounts are rupees as full-precision floats. GST is a flat percentage per
line item drawn from GST_RATES.

Derived money fields (item `amount`, invoice `subtotal`, `taxTotal`,
`grandTotal`) are computed fields: they are always calculated from the
current items, included when serializing, and ignored when supplied as input.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from core.calculations import compute_invoice_totals, compute_item_amount
from core.models.customer import Customer
from utils.timezone import parse_date

GST_RATES: tuple[int, ...] = (0, 5, 12, 18, 28)


class InvoiceStatus(str, Enum):
    """Workflow label. Any status may follow any other."""

    DRAFT = "Draft"
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


def validate_gst_rate(value: float) -> float:
    """Reject GST rates outside the allowed slabs."""
    if value not in GST_RATES:
        allowed = ", ".join(str(r) for r in GST_RATES)
        raise ValueError(f"gstRate must be one of {allowed}, got {value}")
    return value


class InvoiceItem(BaseModel):
    """One line of an invoice."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str
    description: str = ""
    quantity: float = Field(1, ge=0)
    rate: float = Field(0, ge=0)
    gst_rate: float = Field(18, alias="gstRate")

    @field_validator("gst_rate")
    @classmethod
    def gst_rate_allowed(cls, v: float) -> float:
        return validate_gst_rate(v)

    @computed_field
    @property
    def amount(self) -> float:
        """quantity × rate plus GST on it."""
        return compute_item_amount(self.quantity, self.rate, self.gst_rate)


class Invoice(BaseModel):
    """Full invoice document as stored."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    id: str
    invoice_number: str = Field(..., alias="invoiceNumber", min_length=1)
    date: str
    due_date: str = Field(..., alias="dueDate")
    status: InvoiceStatus = InvoiceStatus.PENDING
    customer: Customer = Field(default_factory=Customer)
    items: list[InvoiceItem] = Field(default_factory=list)
    notes: str | None = None

    @field_validator("date", "due_date")
    @classmethod
    def iso_calendar_date(cls, v: str) -> str:
        # Kept as text; only the shape is checked. dueDate may precede date.
        parse_date(v)
        return v

    @computed_field
    @property
    def subtotal(self) -> float:
        """Pre-tax sum of quantity × rate."""
        return compute_invoice_totals(self.items).subtotal

    @computed_field(alias="taxTotal")
    @property
    def tax_total(self) -> float:
        """Sum of GST over all lines."""
        return compute_invoice_totals(self.items).tax_total

    @computed_field(alias="grandTotal")
    @property
    def grand_total(self) -> float:
        """subtotal + taxTotal; equals the sum of item amounts."""
        return compute_invoice_totals(self.items).grand_total

    def to_document(self) -> dict:
        """Serialize to the persisted camelCase layout."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def find_item(self, item_id: str) -> InvoiceItem | None:
        """Item with the given id, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None
