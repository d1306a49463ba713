"""Primary invoice renderer: paginated A4 PDF built with reportlab platypus.

Layout: company header, bill-to / invoice-details block, item table
(header row repeats on every page), totals, order summary, footer, and
a page number on every page.
"""

from __future__ import annotations

import io
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from shopcore.domain.model.invoice import InvoiceLayout
from shopcore.domain.service.document_renderer import DocumentRenderer

ACCENT = colors.HexColor("#2563eb")
RULE = colors.HexColor("#dddddd")
SHADE = colors.HexColor("#f8f9fa")
MARGIN = 20 * mm


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "company": ParagraphStyle(
            "company", parent=base["Title"], textColor=ACCENT, fontSize=20, spaceAfter=4
        ),
        "centered": ParagraphStyle(
            "centered", parent=base["Normal"], alignment=TA_CENTER, fontSize=9,
            textColor=colors.HexColor("#666666"),
        ),
        "heading": ParagraphStyle(
            "heading", parent=base["Heading3"], textColor=ACCENT, spaceAfter=4
        ),
        "body": ParagraphStyle("body", parent=base["Normal"], fontSize=9, leading=12),
        "right": ParagraphStyle(
            "right", parent=base["Normal"], fontSize=9, leading=12, alignment=TA_RIGHT
        ),
        "cell": ParagraphStyle("cell", parent=base["Normal"], fontSize=8.5, leading=10),
    }


def _lines(values) -> str:
    return "<br/>".join(escape(str(v)) for v in values if v)


class ReportlabInvoiceRenderer(DocumentRenderer):

    name = "reportlab"

    def __init__(self, pagesize=A4) -> None:
        self._pagesize = pagesize

    def render(self, layout: InvoiceLayout) -> bytes:
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._pagesize,
            leftMargin=MARGIN,
            rightMargin=MARGIN,
            topMargin=MARGIN,
            bottomMargin=MARGIN,
            title=f"Invoice - {layout.order_number}",
            author=layout.company.name,
        )
        styles = _styles()
        story = []
        story += self._header(layout, styles)
        story += self._parties(layout, styles, doc.width)
        story.append(self._items_table(layout, styles, doc.width))
        story.append(Spacer(1, 6 * mm))
        story += self._summary(layout, styles)
        story += self._footer(layout, styles)

        def number_page(canvas, document) -> None:
            canvas.saveState()
            canvas.setFont("Helvetica", 8)
            canvas.drawRightString(
                self._pagesize[0] - MARGIN,
                MARGIN / 2,
                f"{layout.order_number}  -  page {document.page}",
            )
            canvas.restoreState()

        doc.build(story, onFirstPage=number_page, onLaterPages=number_page)
        return buffer.getvalue()

    # --- Sections -------------------------------------------------------------

    @staticmethod
    def _header(layout: InvoiceLayout, styles) -> list:
        company = layout.company
        contact = (
            *company.address_lines,
            f"Phone: {company.phone}",
            f"Email: {company.email}",
            f"Website: {company.website}",
        )
        return [
            Paragraph(escape(company.name), styles["company"]),
            Paragraph(_lines(contact), styles["centered"]),
            Spacer(1, 8 * mm),
        ]

    @staticmethod
    def _parties(layout: InvoiceLayout, styles, width: float) -> list:
        name, *rest = layout.bill_to
        bill_to = f"<b>{escape(name)}</b><br/>{_lines(rest)}"
        details = _lines(
            (
                f"Invoice Number: {layout.order_number}",
                f"Order ID: {layout.order_id}",
                f"Date: {layout.order_date}",
                f"Time: {layout.order_time}",
                f"Status: {layout.status}",
                f"Due Date: {layout.order_date}",
            )
        )
        table = Table(
            [
                [Paragraph("Bill To:", styles["heading"]),
                 Paragraph("Invoice Details:", styles["heading"])],
                [Paragraph(bill_to, styles["body"]), Paragraph(details, styles["right"])],
            ],
            colWidths=[width / 2, width / 2],
        )
        table.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ]))
        return [table, Spacer(1, 8 * mm)]

    @staticmethod
    def _items_table(layout: InvoiceLayout, styles, width: float) -> Table:
        data = [["#", "Item Description", "SKU", "Qty", "Unit Price", "Total"]]
        for row in layout.rows:
            data.append([
                str(row.index),
                Paragraph(f"<b>{escape(row.description)}</b>", styles["cell"]),
                Paragraph(escape(row.sku), styles["cell"]),
                str(row.quantity),
                row.unit_price,
                row.line_total,
            ])

        first_total_row = len(data)
        for label, amount in layout.totals:
            data.append(["", f"{label}:", "", "", "", amount])
        data.append(["", "GRAND TOTAL:", "", "", "", layout.grand_total])

        fractions = (0.05, 0.40, 0.15, 0.10, 0.15, 0.15)
        table = Table(data, colWidths=[width * f for f in fractions], repeatRows=1)
        style = [
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 8.5),
            ("BACKGROUND", (0, 0), (-1, 0), SHADE),
            ("GRID", (0, 0), (-1, first_total_row - 1), 0.5, RULE),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("ALIGN", (3, 1), (-1, -1), "RIGHT"),
            ("LINEABOVE", (0, first_total_row), (-1, first_total_row), 1.2, colors.black),
            ("FONTNAME", (0, first_total_row), (-1, -1), "Helvetica-Bold"),
            ("BACKGROUND", (0, first_total_row), (-1, -1), SHADE),
            ("TEXTCOLOR", (0, -1), (-1, -1), ACCENT),
        ]
        for row_index in range(first_total_row, len(data)):
            style.append(("SPAN", (1, row_index), (4, row_index)))
            style.append(("ALIGN", (1, row_index), (4, row_index), "RIGHT"))
        table.setStyle(TableStyle(style))
        return table

    @staticmethod
    def _summary(layout: InvoiceLayout, styles) -> list:
        return [
            Paragraph("Order Summary:", styles["heading"]),
            Paragraph(
                _lines((
                    f"Total Items: {layout.total_items}",
                    f"Total Quantity: {layout.total_quantity}",
                    "Payment Method: Online Payment",
                    f"Order Notes: {layout.notes}",
                )),
                styles["body"],
            ),
            Spacer(1, 12 * mm),
        ]

    @staticmethod
    def _footer(layout: InvoiceLayout, styles) -> list:
        generated = datetime.now(timezone.utc).strftime("%Y-%m-%d at %H:%M:%S UTC")
        return [
            Paragraph(
                "<b>Thank you for your business!</b><br/>"
                + _lines((
                    "This is a computer-generated invoice. No signature required.",
                    f"For questions or support, please contact us at "
                    f"{layout.company.support_email}",
                    f"Generated on {generated}",
                )),
                styles["centered"],
            )
        ]
