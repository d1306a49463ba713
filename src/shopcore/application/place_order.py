"""Application service: Place Order use case (the order transaction writer).

Turns a checkout request into a persisted Order. Everything that can be
rejected is rejected before the single write; the write itself is one
repository call backed by one gateway transaction, so either the order
and all of its items exist afterwards or none of them do.

The cart is never touched here. The caller clears it once this returns.
"""

from __future__ import annotations

import structlog

from shopcore.application.dto import CheckoutRequest, OrderDTO
from shopcore.domain.exceptions import (
    InvalidRequest,
    OrderCreationFailed,
    PersistenceError,
)
from shopcore.domain.model.order import (
    Address,
    Order,
    OrderItem,
    OrderPricing,
    OrderStatus,
)
from shopcore.domain.model.principal import Principal, require_principal
from shopcore.domain.model.value_objects import Quantity
from shopcore.domain.repository.order_repository import OrderRepository
from shopcore.domain.service.order_number import generate_order_number

logger = structlog.get_logger(__name__)

CHECKOUT_NOTE = "Order placed through checkout"


class PlaceOrderHandler:

    def __init__(self, order_repo: OrderRepository, number_source=generate_order_number) -> None:
        self._order_repo = order_repo
        self._number_source = number_source

    def handle(
        self,
        principal: Principal | None,
        request: CheckoutRequest,
        pricing: OrderPricing | None = None,
        status: OrderStatus = OrderStatus.CONFIRMED,
        notes: str | None = CHECKOUT_NOTE,
    ) -> OrderDTO:
        """Create an order for ``principal`` from ``request``.

        Raises:
            Unauthenticated: no principal.
            InvalidRequest: no items, bad billing info, a client total that
                does not match, or a non-initial status.
            OrderCreationFailed: the storage transaction was aborted.
        """
        principal = require_principal(principal)

        if not request.items:
            raise InvalidRequest("No items provided")
        if request.billing_info is None:
            raise InvalidRequest("Billing information required")
        billing = Address.from_mapping(request.billing_info)

        order_id = self._order_repo.next_id()
        items = [
            OrderItem(
                id=self._order_repo.next_item_id(),
                order_id=order_id,
                product_id=item.product_id,
                quantity=Quantity(item.quantity),
                price=item.price,  # frozen at order time
            )
            for item in request.items
        ]
        order = Order.create(
            order_id=order_id,
            order_number=self._number_source(),
            customer_id=principal.id,
            items=items,
            billing_address=billing,
            pricing=pricing,
            status=status,
            notes=notes,
        )

        if request.total is not None and request.total.quantized() != order.total.quantized():
            raise InvalidRequest(
                f"Submitted total {request.total} does not match order total {order.total}"
            )

        try:
            self._order_repo.add(order)
        except PersistenceError as exc:
            logger.error(
                "order_creation_failed",
                order_number=order.order_number,
                customer_id=principal.id,
                error=str(exc),
            )
            raise OrderCreationFailed(
                f"Order could not be created: {exc}"
            ) from exc

        logger.info(
            "order_created",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=principal.id,
            items=len(order.items),
            total=order.total.plain(),
        )
        return OrderDTO.from_order(order)
