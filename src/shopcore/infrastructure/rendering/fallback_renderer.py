"""Degraded invoice renderer: a minimal single-page PDF assembled by hand.

Has no dependencies that can fail at runtime. The output is a valid
PDF 1.4 file (correct xref offsets) that carries the invoice number and
a notice that the full invoice could not be produced; its small size is
how downstream consumers tell it apart from a real invoice.
"""

from __future__ import annotations

from shopcore.domain.model.invoice import InvoiceLayout
from shopcore.domain.service.document_renderer import DocumentRenderer

NOTICE = "Full invoice generation failed - this is a minimal fallback document."


def _pdf_text(value: str) -> str:
    value = value.encode("latin-1", "replace").decode("latin-1")
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_minimal_pdf(lines: list[tuple[int, str]]) -> bytes:
    """Build a one-page Letter PDF showing ``(font size, text)`` lines."""
    ops = ["BT", "72 720 Td"]
    for i, (size, text) in enumerate(lines):
        if i:
            ops.append(f"0 -{size + 8} Td")
        ops.append(f"/F1 {size} Tf")
        ops.append(f"({_pdf_text(text)}) Tj")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_at}\n%%EOF\n"
    ).encode()
    return bytes(out)


class MinimalPdfRenderer(DocumentRenderer):

    name = "fallback"

    def render(self, layout: InvoiceLayout) -> bytes:
        return build_minimal_pdf([
            (14, f"INVOICE {layout.order_number}"),
            (10, NOTICE),
            (10, "Please contact support for a full invoice."),
        ])
