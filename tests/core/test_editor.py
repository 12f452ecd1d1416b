"""Tests for InvoiceEditor - draft mutations and the save gate."""

import pytest
from pydantic import ValidationError

from core.editor import InvoiceEditor, MISSING_CUSTOMER_NAME, MISSING_ITEMS
from core.models import InvoiceStatus


@pytest.fixture
def new_editor(store):
    return InvoiceEditor(store.create_empty(), is_new=True)


class TestDraftIsolation:

    def test_editor_works_on_a_copy(self, sample_invoice):
        """Edits do not leak into the invoice passed in."""
        editor = InvoiceEditor(sample_invoice, is_new=False)
        editor.set_customer_field("name", "Someone Else")
        editor.update_item("item-1", "quantity", 10)

        assert sample_invoice.customer.name == "Ravi Sharma"
        assert sample_invoice.items[0].quantity == 2


class TestCustomerFields:

    def test_sets_each_field(self, new_editor):
        """name, phone, email and address are editable."""
        for name, value in [
            ("name", "Anita"), ("phone", "9876543210"),
            ("email", "anita@example.com"), ("address", "Arera Colony"),
        ]:
            new_editor.set_customer_field(name, value)
        assert new_editor.invoice.customer.model_dump() == {
            "name": "Anita",
            "phone": "9876543210",
            "email": "anita@example.com",
            "address": "Arera Colony",
        }

    def test_unknown_field_rejected(self, new_editor):
        """Only the four contact fields exist."""
        with pytest.raises(ValueError, match="Unknown customer field"):
            new_editor.set_customer_field("gstin", "X")


class TestInvoiceFields:

    def test_sets_dates_and_notes(self, new_editor):
        """date, dueDate and notes are editable."""
        new_editor.set_field("date", "2025-04-01")
        new_editor.set_field("dueDate", "2025-04-30")
        new_editor.set_field("notes", "Deliver after 5pm")

        invoice = new_editor.invoice
        assert (invoice.date, invoice.due_date, invoice.notes) == (
            "2025-04-01", "2025-04-30", "Deliver after 5pm",
        )

    def test_sets_status_from_label(self, new_editor):
        """Any status can be chosen by its label."""
        new_editor.set_field("status", "Paid")
        assert new_editor.invoice.status == InvoiceStatus.PAID
        new_editor.set_field("status", "Draft")
        assert new_editor.invoice.status == InvoiceStatus.DRAFT

    def test_unknown_status_rejected(self, new_editor):
        """Unknown status labels raise."""
        with pytest.raises(ValueError):
            new_editor.set_field("status", "Cancelled")

    def test_malformed_date_rejected(self, new_editor):
        """Dates must be YYYY-MM-DD."""
        with pytest.raises(ValidationError):
            new_editor.set_field("date", "tomorrow")

    def test_derived_fields_not_settable(self, new_editor):
        """Totals and numbering are not editable fields."""
        with pytest.raises(ValueError, match="Unknown invoice field"):
            new_editor.set_field("grandTotal", 10)
        with pytest.raises(ValueError, match="Unknown invoice field"):
            new_editor.set_field("invoice_number", "AF-99-999")


class TestItems:

    def test_add_item_defaults(self, new_editor):
        """New line: quantity 1, rate 0, GST 18%, zero amount."""
        item = new_editor.add_item()
        assert (item.quantity, item.rate, item.gst_rate, item.amount) == (1, 0, 18, 0)
        assert new_editor.invoice.items == [item]

    def test_add_item_uses_configured_gst(self, store):
        """The editor's default GST rate applies to new lines."""
        editor = InvoiceEditor(store.create_empty(), is_new=True, new_item_gst_rate=5)
        assert editor.add_item().gst_rate == 5

    def test_added_items_have_distinct_ids(self, new_editor):
        """Each line gets its own id."""
        ids = {new_editor.add_item().id for _ in range(20)}
        assert len(ids) == 20

    def test_update_recomputes_amount(self, new_editor):
        """2 × 100 at 18% → 236, and totals follow."""
        item = new_editor.add_item()
        new_editor.update_item(item.id, "quantity", 2)
        new_editor.update_item(item.id, "rate", 100)
        new_editor.update_item(item.id, "gstRate", 18)

        assert new_editor.invoice.items[0].amount == pytest.approx(236)
        assert new_editor.invoice.subtotal == pytest.approx(200)
        assert new_editor.invoice.tax_total == pytest.approx(36)
        assert new_editor.invoice.grand_total == pytest.approx(236)

    def test_update_description(self, new_editor):
        """Description changes do not touch the amount."""
        item = new_editor.add_item()
        new_editor.update_item(item.id, "description", "Sofa set")
        assert new_editor.invoice.items[0].description == "Sofa set"
        assert new_editor.invoice.items[0].amount == 0

    def test_update_unknown_item(self, new_editor):
        """Unknown item id raises."""
        with pytest.raises(ValueError, match="not found"):
            new_editor.update_item("nope", "rate", 1)

    def test_update_rejects_negative_rate(self, new_editor):
        """Negative rates are refused."""
        item = new_editor.add_item()
        with pytest.raises(ValidationError):
            new_editor.update_item(item.id, "rate", -1)

    def test_update_rejects_unlisted_gst(self, new_editor):
        """GST rate must be one of the slabs."""
        item = new_editor.add_item()
        with pytest.raises(ValidationError):
            new_editor.update_item(item.id, "gst_rate", 15)

    def test_remove_item(self, new_editor):
        """Removed line no longer counts toward totals."""
        keep = new_editor.add_item()
        drop = new_editor.add_item()
        new_editor.update_item(keep.id, "rate", 10)
        new_editor.update_item(drop.id, "rate", 90)

        assert new_editor.remove_item(drop.id) is True
        assert [i.id for i in new_editor.invoice.items] == [keep.id]
        assert new_editor.invoice.subtotal == pytest.approx(10)

    def test_remove_missing_item(self, new_editor):
        """Removing an unknown id reports False."""
        assert new_editor.remove_item("nope") is False

    def test_removing_all_items_zeroes_totals(self, sample_invoice):
        """With no items left every total is zero."""
        editor = InvoiceEditor(sample_invoice, is_new=False)
        editor.remove_item("item-1")
        invoice = editor.invoice
        assert (invoice.subtotal, invoice.tax_total, invoice.grand_total) == (0, 0, 0)


class TestValidate:

    def test_valid_draft(self, sample_invoice):
        """Named customer and one item passes."""
        result = InvoiceEditor(sample_invoice, is_new=False).validate()
        assert result.ok
        assert result.violations == []

    def test_missing_customer_name(self, new_editor):
        """Blank name is reported."""
        new_editor.add_item()
        result = new_editor.validate()
        assert not result.ok
        assert result.violations == [MISSING_CUSTOMER_NAME]

    def test_whitespace_name_counts_as_missing(self, new_editor):
        """A name of spaces is still missing."""
        new_editor.set_customer_field("name", "   ")
        new_editor.add_item()
        assert new_editor.validate().violations == [MISSING_CUSTOMER_NAME]

    def test_missing_items(self, new_editor):
        """No items is reported."""
        new_editor.set_customer_field("name", "Anita")
        assert new_editor.validate().violations == [MISSING_ITEMS]

    def test_both_violations(self, new_editor):
        """Both problems are reported together."""
        assert new_editor.validate().violations == [MISSING_CUSTOMER_NAME, MISSING_ITEMS]

    def test_zero_amount_item_allowed(self, new_editor):
        """A free item still counts as an item."""
        new_editor.set_customer_field("name", "Anita")
        new_editor.add_item()
        assert new_editor.validate().ok
