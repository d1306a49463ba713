"""Application service: List Orders use case (admin query).

Paged listing, newest first. Export-mode listings may ask for bigger
pages but are still capped at ``EXPORT_PAGE_CAP``.
"""

from __future__ import annotations

from shopcore.application.dto import OrderDTO, OrderPage
from shopcore.domain.exceptions import ValidationError
from shopcore.domain.repository.order_repository import OrderRepository

DEFAULT_PAGE_SIZE = 50
EXPORT_PAGE_CAP = 5000


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, page: int = 1, limit: int = DEFAULT_PAGE_SIZE, export: bool = False) -> OrderPage:
        if page < 1:
            raise ValidationError("Page must be 1 or greater")
        if limit < 1:
            raise ValidationError("Limit must be 1 or greater")

        actual_limit = min(limit, EXPORT_PAGE_CAP) if export else limit
        orders = self._order_repo.list_page(skip=(page - 1) * actual_limit, take=actual_limit)
        return OrderPage(
            items=[OrderDTO.from_order(o) for o in orders],
            page=page,
            limit=actual_limit,
            total=self._order_repo.count(),
        )
