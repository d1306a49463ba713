"""Tests for laying out an invoice from a persisted order."""

from dataclasses import replace

from shopcore.domain.model.invoice import CompanyDetails, InvoiceDocument, InvoiceLayout
from shopcore.domain.model.order import OrderPricing
from shopcore.domain.model.value_objects import Money
from tests.fakes import make_order


class TestInvoiceLayout:

    def test_rows_and_totals(self):
        order = make_order(
            items=[("p1", 2, "10.00"), ("p2", 1, "4.50")],
            pricing=OrderPricing(tax=Money.of("2.45"), shipping=Money.of("5")),
        )
        layout = InvoiceLayout.from_order(order)

        assert [r.index for r in layout.rows] == [1, 2]
        assert layout.rows[0].description == "Product P1"
        assert layout.rows[0].sku == "SKU-p1"
        assert layout.rows[0].unit_price == "$10.00"
        assert layout.rows[0].line_total == "$20.00"
        assert layout.totals == (
            ("Subtotal", "$24.50"),
            ("Tax", "$2.45"),
            ("Shipping", "$5.00"),
        )
        assert layout.grand_total == "$31.95"
        assert layout.total_items == 2
        assert layout.total_quantity == 3

    def test_discount_row_only_when_present(self):
        order = make_order(pricing=OrderPricing(discount=Money.of("3")))
        layout = InvoiceLayout.from_order(order)
        assert layout.totals[-1] == ("Discount", "-$3.00")
        assert layout.grand_total == "$17.00"

    def test_uses_stored_amounts_not_recomputed(self):
        order = make_order()
        order.total = Money.of("99.99")
        assert InvoiceLayout.from_order(order).grand_total == "$99.99"

    def test_missing_product_falls_back_to_id(self):
        order = make_order()
        order.items = [replace(order.items[0], product=None)]
        row = InvoiceLayout.from_order(order).rows[0]
        assert row.description == "Product p1"
        assert row.sku == "N/A"

    def test_bill_to(self):
        layout = InvoiceLayout.from_order(make_order(phone="", state="Greater London"))

        assert layout.bill_to[0] == "Ada Lovelace"
        assert layout.bill_to[2] == "London, Greater London N1 9GU"
        assert layout.bill_to[4] == "Email: ada@example.com"
        assert layout.bill_to[5] == "Phone: Phone not provided"

    def test_notes_default(self):
        assert InvoiceLayout.from_order(make_order()).notes == "No additional notes"
        assert InvoiceLayout.from_order(make_order(notes="Gift")).notes == "Gift"

    def test_company_details(self):
        company = CompanyDetails(name="Acme")
        assert InvoiceLayout.from_order(make_order(), company).company.name == "Acme"


class TestInvoiceDocument:

    def test_filename_and_headers(self):
        doc = InvoiceDocument(order_id="o1", order_number="ORD-1-X", content=b"%PDF-1.4")
        assert doc.filename == "invoice-ORD-1-X.pdf"
        assert doc.content_disposition == 'attachment; filename="invoice-ORD-1-X.pdf"'
        assert doc.content_type == "application/pdf"
        assert doc.size == 8
        assert not doc.degraded
