"""Application service: Show Order use case (query)."""

from __future__ import annotations

from shopcore.application.dto import OrderDTO
from shopcore.domain.exceptions import EntityNotFoundError
from shopcore.domain.model.principal import (
    Principal,
    require_owner_or_admin,
    require_principal,
)
from shopcore.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: str, principal: Principal | None) -> OrderDTO:
        """Admins see any order; customers only their own."""
        principal = require_principal(principal)
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        require_owner_or_admin(principal, order.customer_id, f"Order {order_id}")
        return OrderDTO.from_order(order)
