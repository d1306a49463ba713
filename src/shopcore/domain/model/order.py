"""Order aggregate: the record of a completed checkout.

The Order owns its items. It is created once, fully formed, by
``Order.create()``; afterwards only out-of-scope order management flows
change its status.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from enum import Enum

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


# Statuses an order may be born with.
INITIAL_STATUSES = (OrderStatus.CONFIRMED, OrderStatus.PENDING)


@dataclass(frozen=True)
class Address:
    first_name: str
    last_name: str
    email: str
    address: str
    city: str
    zip_code: str
    country: str
    phone: str = ""
    state: str = ""

    REQUIRED = ("first_name", "last_name", "email", "address", "city", "zip_code", "country")

    @staticmethod
    def from_mapping(raw: dict) -> Address:
        """Build from snake_case or checkout-style camelCase keys."""
        if not isinstance(raw, dict):
            raise ValidationError("Billing information required")
        values = {}
        for f in fields(Address):
            value = raw.get(f.name, raw.get(_camel(f.name), ""))
            values[f.name] = "" if value is None else str(value).strip()

        missing = [name for name in Address.REQUIRED if not values[name]]
        if missing:
            raise ValidationError(
                f"Billing information missing required fields: {', '.join(missing)}"
            )
        if "@" not in values["email"]:
            raise ValidationError(f"Invalid billing email: {values['email']!r}")
        return Address(**values)

    def to_mapping(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


@dataclass(frozen=True)
class ProductRef:
    """Display identity of a product, joined on read. Never a price source."""

    id: str
    name: str
    sku: str


@dataclass(frozen=True)
class CustomerRef:
    id: str
    name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class OrderItem:
    """One ordered product with its unit price frozen at order time."""

    id: str
    order_id: str
    product_id: str
    quantity: Quantity
    price: Money
    product: ProductRef | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass(frozen=True)
class OrderPricing:
    """Order-time adjustments on top of the item subtotal.

    Zero by default; callers with a tax or shipping source pass real values.
    """

    tax: Money = field(default_factory=Money.zero)
    shipping: Money = field(default_factory=Money.zero)
    discount: Money = field(default_factory=Money.zero)


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders; it derives and checks the
    totals. ``__init__`` stays plain so repositories can reconstitute
    persisted orders as they were stored.
    """

    id: str
    order_number: str
    status: OrderStatus
    subtotal: Money
    tax: Money
    shipping: Money
    discount: Money
    total: Money
    customer_id: str
    billing_address: Address
    shipping_address: Address
    items: list[OrderItem]
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime | None = None
    customer: CustomerRef | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        order_number: str,
        customer_id: str,
        items: list[OrderItem],
        billing_address: Address,
        pricing: OrderPricing | None = None,
        status: OrderStatus = OrderStatus.CONFIRMED,
        notes: str | None = None,
    ) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")
        if status not in INITIAL_STATUSES:
            raise ValidationError(
                f"Orders cannot be created in {status.value} status"
            )
        for item in items:
            if item.order_id != order_id:
                raise ValidationError(
                    f"Item {item.id} belongs to order {item.order_id}, not {order_id}"
                )

        pricing = pricing or OrderPricing()
        subtotal = Money.total_of(item.line_total for item in items)
        total = subtotal + pricing.tax + pricing.shipping - pricing.discount

        return Order(
            id=order_id,
            order_number=order_number,
            status=status,
            subtotal=subtotal,
            tax=pricing.tax,
            shipping=pricing.shipping,
            discount=pricing.discount,
            total=total,
            customer_id=customer_id,
            billing_address=billing_address,
            shipping_address=billing_address,
            items=list(items),
            notes=notes,
        )

    # --- Computed properties --------------------------------------------------

    @property
    def item_quantity(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def items_subtotal(self) -> Money:
        return Money.total_of(item.line_total for item in self.items)

    def totals_consistent(self) -> bool:
        expected = self.subtotal + self.tax + self.shipping
        return (
            self.subtotal == self.items_subtotal
            and expected.amount - self.discount.amount == self.total.amount
        )
