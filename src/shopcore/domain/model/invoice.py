"""Invoice layout and the rendered invoice document.

``InvoiceLayout`` is everything a renderer needs, already laid out and
formatted, taken only from the order's own persisted fields. Renderers
draw it; they never compute money.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcore.domain.model.order import Order

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class CompanyDetails:
    name: str = "Product System"
    address_lines: tuple[str, ...] = ("123 Commerce Street", "Business City, BC 12345")
    phone: str = "(555) 123-4567"
    email: str = "info@productsystem.com"
    website: str = "www.productsystem.com"
    support_email: str = "support@productsystem.com"


@dataclass(frozen=True)
class InvoiceRow:
    index: int
    description: str
    sku: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class InvoiceLayout:
    order_id: str
    order_number: str
    status: str
    order_date: str
    order_time: str
    company: CompanyDetails
    bill_to: tuple[str, ...]
    rows: tuple[InvoiceRow, ...]
    totals: tuple[tuple[str, str], ...]
    grand_total: str
    total_items: int
    total_quantity: int
    notes: str

    @staticmethod
    def from_order(order: Order, company: CompanyDetails | None = None) -> InvoiceLayout:
        billing = order.billing_address
        customer = order.customer
        name = billing.full_name or (customer.name if customer and customer.name else "Customer")
        email = billing.email or (customer.email if customer and customer.email else "")
        city_line = " ".join(
            part for part in (f"{billing.city},", billing.state, billing.zip_code) if part
        )
        bill_to = (
            name,
            billing.address or "Address not provided",
            city_line,
            billing.country,
            f"Email: {email or 'Email not provided'}",
            f"Phone: {billing.phone or 'Phone not provided'}",
        )

        rows = tuple(
            InvoiceRow(
                index=i,
                description=item.product.name if item.product and item.product.name
                else f"Product {item.product_id}",
                sku=item.product.sku if item.product and item.product.sku else "N/A",
                quantity=item.quantity.value,
                unit_price=str(item.price),
                line_total=str(item.line_total),
            )
            for i, item in enumerate(order.items, start=1)
        )

        totals = [
            ("Subtotal", str(order.subtotal)),
            ("Tax", str(order.tax)),
            ("Shipping", str(order.shipping)),
        ]
        if not order.discount.is_zero:
            totals.append(("Discount", f"-{order.discount}"))

        return InvoiceLayout(
            order_id=order.id,
            order_number=order.order_number,
            status=order.status.value,
            order_date=order.created_at.strftime("%Y-%m-%d"),
            order_time=order.created_at.strftime("%H:%M:%S UTC"),
            company=company or CompanyDetails(),
            bill_to=bill_to,
            rows=rows,
            totals=tuple(totals),
            grand_total=str(order.total),
            total_items=len(order.items),
            total_quantity=order.item_quantity,
            notes=order.notes or "No additional notes",
        )


@dataclass(frozen=True)
class InvoiceDocument:
    order_id: str
    order_number: str
    content: bytes = field(repr=False)
    degraded: bool = False
    content_type: str = PDF_CONTENT_TYPE

    @property
    def filename(self) -> str:
        return f"invoice-{self.order_number}.pdf"

    @property
    def content_disposition(self) -> str:
        return f'attachment; filename="{self.filename}"'

    @property
    def size(self) -> int:
        return len(self.content)
