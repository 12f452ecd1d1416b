"""Customer (bill-to) details embedded in each invoice."""

from pydantic import BaseModel, ConfigDict


class Customer(BaseModel):
    """
    Bill-to party of an invoice.

    All fields are free text and default to empty. Only `name` is required
    for an invoice to be saved, and that rule lives in the save gate, not here,
    so a half-filled customer can sit in an unsaved draft.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""
