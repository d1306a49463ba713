"""Abstract durable store for a single cart's lines."""

from __future__ import annotations

from abc import ABC, abstractmethod

from shopcore.domain.model.cart import CartLine


class CartStore(ABC):

    @abstractmethod
    def load(self) -> list[CartLine]:
        """Return the stored lines; empty if nothing was ever saved.

        Raises CartStateCorrupt if stored content cannot be parsed.
        """

    @abstractmethod
    def save(self, lines: list[CartLine]) -> None:
        """Replace the stored lines."""

    @abstractmethod
    def discard(self) -> None:
        """Forget the stored cart entirely."""
