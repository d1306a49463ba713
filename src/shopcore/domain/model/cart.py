"""Cart lines and the snapshot derived from them.

A cart holds at most one line per product. Totals are never stored on
their own: ``CartSnapshot.of(lines)`` is the only way to get them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace

from shopcore.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class NewCartLine:
    """What the shopper asked to add; the cart assigns the line id."""

    product_id: str
    name: str
    unit_price: Money
    sku: str
    quantity: int = 1
    image_ref: str | None = None


@dataclass(frozen=True)
class CartLine:
    id: str
    product_id: str
    name: str
    unit_price: Money
    quantity: int
    sku: str
    image_ref: str | None = None

    @staticmethod
    def from_new(line: NewCartLine) -> CartLine:
        Quantity(line.quantity)  # rejects zero / negative adds
        return CartLine(
            id=f"{line.product_id}-{uuid.uuid4().hex[:12]}",
            product_id=line.product_id,
            name=line.name,
            unit_price=line.unit_price,
            quantity=line.quantity,
            sku=line.sku,
            image_ref=line.image_ref,
        )

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=max(1, quantity))


@dataclass(frozen=True)
class CartSnapshot:
    lines: tuple[CartLine, ...]
    subtotal: Money
    count: int

    @staticmethod
    def of(lines) -> CartSnapshot:
        lines = tuple(lines)
        return CartSnapshot(
            lines=lines,
            subtotal=Money.total_of(line.line_total for line in lines),
            count=sum(line.quantity for line in lines),
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines
