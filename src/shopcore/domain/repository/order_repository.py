"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_id(self) -> str:
        """Generate the next unique order ID."""

    @abstractmethod
    def next_item_id(self) -> str:
        """Generate a unique order item ID."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and all of its items as one atomic unit."""

    @abstractmethod
    def count(self) -> int:
        """Total number of orders."""

    @abstractmethod
    def list_page(self, skip: int, take: int) -> list[Order]:
        """Return orders newest first, one page at a time."""
