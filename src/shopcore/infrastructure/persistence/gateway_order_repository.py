"""OrderRepository on top of a PersistenceGateway.

An order is stored as one ``orders`` record plus one ``order_items``
record per item, always written together in one gateway transaction.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from shopcore.domain.model.order import (
    Address,
    CustomerRef,
    Order,
    OrderItem,
    OrderStatus,
    ProductRef,
)
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.repository.gateway import Insert, PersistenceGateway, Record
from shopcore.domain.repository.order_repository import OrderRepository

ORDER_INCLUDE = ("customer", "items.product")


class GatewayOrderRepository(OrderRepository):

    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway

    # --- OrderRepository interface --------------------------------------------

    def next_id(self) -> str:
        return self._gateway.next_id("orders")

    def next_item_id(self) -> str:
        return self._gateway.next_id("order_items")

    def get_by_id(self, order_id: str) -> Order | None:
        raw = self._gateway.get("orders", order_id, include=ORDER_INCLUDE)
        return None if raw is None else self._to_domain(raw)

    def add(self, order: Order) -> None:
        ops = [Insert("orders", self._header_to_raw(order))]
        ops.extend(Insert("order_items", self._item_to_raw(item, order)) for item in order.items)
        self._gateway.transaction(ops)

    def count(self) -> int:
        return self._gateway.count("orders")

    def list_page(self, skip: int, take: int) -> list[Order]:
        rows = self._gateway.find_many(
            "orders", skip=skip, take=take, include=ORDER_INCLUDE, order_by="-created_at"
        )
        return [self._to_domain(raw) for raw in rows]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _header_to_raw(order: Order) -> Record:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "status": order.status.value,
            "subtotal": str(order.subtotal.amount),
            "tax": str(order.tax.amount),
            "shipping": str(order.shipping.amount),
            "discount": str(order.discount.amount),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "customer_id": order.customer_id,
            "billing_address": order.billing_address.to_mapping(),
            "shipping_address": order.shipping_address.to_mapping(),
            "notes": order.notes,
            "created_at": order.created_at.isoformat(),
            "updated_at": (order.updated_at or order.created_at).isoformat(),
        }

    @staticmethod
    def _item_to_raw(item: OrderItem, order: Order) -> Record:
        return {
            "id": item.id,
            "order_id": item.order_id,
            "product_id": item.product_id,
            "quantity": item.quantity.value,
            "price": str(item.price.amount),
            "currency": item.price.currency,
            "created_at": order.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: Record) -> Order:
        currency = raw.get("currency", "USD")

        def money(key: str, source: Record = raw) -> Money:
            return Money(Decimal(str(source.get(key) or "0")), source.get("currency", currency))

        items = [
            OrderItem(
                id=i["id"],
                order_id=i["order_id"],
                product_id=i["product_id"],
                quantity=Quantity(int(i["quantity"])),
                price=money("price", i),
                product=_product_ref(i.get("product")),
            )
            for i in raw.get("items") or []
        ]
        customer = raw.get("customer")
        billing = Address(**raw["billing_address"])
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            status=OrderStatus(raw["status"]),
            subtotal=money("subtotal"),
            tax=money("tax"),
            shipping=money("shipping"),
            discount=money("discount"),
            total=money("total"),
            customer_id=raw["customer_id"],
            billing_address=billing,
            shipping_address=Address(**raw.get("shipping_address") or raw["billing_address"]),
            items=items,
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]) if raw.get("updated_at") else None,
            customer=CustomerRef(
                id=customer["id"], name=customer.get("name"), email=customer.get("email")
            ) if customer else None,
        )


def _product_ref(raw: Record | None) -> ProductRef | None:
    if not raw:
        return None
    return ProductRef(id=raw["id"], name=raw.get("name") or "", sku=raw.get("sku") or "")
