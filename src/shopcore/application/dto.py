"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.cart import CartSnapshot
from shopcore.domain.model.order import Order, OrderPricing
from shopcore.domain.model.value_objects import Money


@dataclass(frozen=True)
class CheckoutItem:
    """Input: one product to order, at the price the shopper saw."""

    product_id: str
    quantity: int
    price: Money


@dataclass(frozen=True)
class CheckoutRequest:
    """Input: everything the order writer needs from checkout."""

    items: list[CheckoutItem]
    billing_info: dict | None
    total: Money | None = None

    @staticmethod
    def from_snapshot(
        snapshot: CartSnapshot,
        billing_info: dict | None,
        pricing: OrderPricing | None = None,
    ) -> CheckoutRequest:
        """The expected total is what the shopper was shown at checkout."""
        pricing = pricing or OrderPricing()
        return CheckoutRequest(
            items=[
                CheckoutItem(line.product_id, line.quantity, line.unit_price)
                for line in snapshot.lines
            ],
            billing_info=billing_info,
            total=snapshot.subtotal + pricing.tax + pricing.shipping - pricing.discount,
        )

    @staticmethod
    def from_payload(payload: dict) -> CheckoutRequest:
        """Parse ``{items: [{productId, quantity, price}], total, billingInfo}``."""
        raw_items = payload.get("items")
        if not isinstance(raw_items, list) or not raw_items:
            raise ValidationError("No items provided")
        items = []
        for raw in raw_items:
            try:
                items.append(
                    CheckoutItem(
                        product_id=str(raw.get("productId") or raw["product_id"]),
                        quantity=raw["quantity"],
                        price=Money.of(raw["price"]),
                    )
                )
            except (KeyError, AttributeError, TypeError) as exc:
                raise ValidationError(f"Malformed checkout item: {raw!r}") from exc
        total = payload.get("total")
        return CheckoutRequest(
            items=items,
            billing_info=payload.get("billingInfo", payload.get("billing_info")),
            total=None if total is None else Money.of(total),
        )


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single ordered item as displayed to the user."""

    id: str
    product_id: str
    product_name: str
    sku: str
    quantity: int
    price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    order_number: str
    status: str
    customer_id: str
    items: list[OrderItemDTO]
    subtotal: str
    tax: str
    shipping: str
    discount: str
    total: str
    created_at: str
    notes: str | None = None

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            order_number=order.order_number,
            status=order.status.value,
            customer_id=order.customer_id,
            items=[
                OrderItemDTO(
                    id=item.id,
                    product_id=item.product_id,
                    product_name=item.product.name if item.product else "",
                    sku=item.product.sku if item.product else "",
                    quantity=item.quantity.value,
                    price=str(item.price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            subtotal=str(order.subtotal),
            tax=str(order.tax),
            shipping=str(order.shipping),
            discount=str(order.discount),
            total=str(order.total),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            notes=order.notes,
        )


@dataclass(frozen=True)
class OrderPage:
    """Output: one page of the admin order listing."""

    items: list[OrderDTO]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0


@dataclass(frozen=True)
class ExportResult:
    """Output: a finished export, ready to serialise."""

    entity_type: str
    data: list[dict] = field(default_factory=list)
    total: int = 0

    @property
    def message(self) -> str:
        return f"Successfully prepared {self.total} {self.entity_type} for export"

    def to_payload(self) -> dict:
        return {
            "success": True,
            "data": self.data,
            "total": self.total,
            "message": self.message,
        }
