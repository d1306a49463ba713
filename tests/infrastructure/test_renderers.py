"""Tests for the reportlab and fallback invoice renderers."""

import re

from shopcore.domain.model.invoice import InvoiceLayout
from shopcore.domain.model.order import OrderPricing
from shopcore.domain.model.value_objects import Money
from shopcore.infrastructure.rendering.fallback_renderer import (
    NOTICE,
    MinimalPdfRenderer,
    build_minimal_pdf,
)
from shopcore.infrastructure.rendering.reportlab_renderer import ReportlabInvoiceRenderer
from tests.fakes import make_order


def _layout(**kwargs):
    return InvoiceLayout.from_order(make_order(**kwargs))


class TestReportlabRenderer:

    def test_produces_pdf(self):
        content = ReportlabInvoiceRenderer().render(_layout())
        assert content.startswith(b"%PDF")
        assert content.rstrip().endswith(b"%%EOF")

    def test_handles_markup_characters_and_discount(self):
        layout = _layout(
            notes="Fragile <glass> & ceramics",
            pricing=OrderPricing(discount=Money.of("1")),
            firstName="O'Brien & Sons",
        )
        assert ReportlabInvoiceRenderer().render(layout).startswith(b"%PDF")

    def test_many_items_span_pages(self):
        items = [(f"p{i}", 1, "1.00") for i in range(80)]
        content = ReportlabInvoiceRenderer().render(_layout(items=items))
        assert content.startswith(b"%PDF")

    def test_larger_than_fallback(self):
        layout = _layout()
        assert len(ReportlabInvoiceRenderer().render(layout)) > len(MinimalPdfRenderer().render(layout))


class TestMinimalPdf:

    def test_contains_number_and_notice(self):
        content = MinimalPdfRenderer().render(_layout())
        assert content.startswith(b"%PDF-1.4")
        assert b"INVOICE ORD-1700000000000-ABC123XYZ" in content
        assert NOTICE.encode() in content

    def test_xref_offsets_point_at_objects(self):
        content = build_minimal_pdf([(12, "hello (world)")])
        xref_at = int(re.search(rb"startxref\n(\d+)", content).group(1))
        assert content[xref_at:].startswith(b"xref")

        offsets = re.findall(rb"(\d{10}) 00000 n", content)
        for number, offset in enumerate(offsets, start=1):
            assert content[int(offset):].startswith(f"{number} 0 obj".encode())

    def test_escapes_parentheses(self):
        assert b"(hello \\(world\\)) Tj" in build_minimal_pdf([(12, "hello (world)")])
