"""Domain service: Cart Aggregator.

Reducer-style staging area for line items before checkout. Every
mutation builds the next line list, derives the snapshot from it and
saves it through the injected CartStore, all in one step, so the totals
can never lag behind the lines.

Single-threaded and synchronous; one aggregator per cart owner.
"""

from __future__ import annotations

from typing import Callable, Iterable

import structlog

from shopcore.domain.exceptions import CartStateCorrupt
from shopcore.domain.model.cart import CartLine, CartSnapshot, NewCartLine
from shopcore.domain.model.principal import Principal
from shopcore.domain.repository.cart_store import CartStore

logger = structlog.get_logger(__name__)

GUEST_CART_KEY = "cart_guest"


def cart_key(principal: Principal | None) -> str:
    if principal is None:
        return GUEST_CART_KEY
    return f"cart_{principal.id}"


class CartAggregator:

    def __init__(self, store: CartStore, lines: Iterable[CartLine] = ()) -> None:
        self._store = store
        self._snapshot = CartSnapshot.of(lines)

    @classmethod
    def restore(cls, store: CartStore) -> CartAggregator:
        """Rehydrate from the store; unreadable state yields an empty cart."""
        try:
            lines = store.load()
        except CartStateCorrupt as exc:
            logger.warning("cart_state_discarded", reason=str(exc))
            lines = []
        return cls(store, lines)

    # --- Queries --------------------------------------------------------------

    def snapshot(self) -> CartSnapshot:
        return self._snapshot

    @property
    def lines(self) -> tuple[CartLine, ...]:
        return self._snapshot.lines

    # --- Commands -------------------------------------------------------------

    def add_line(self, line: NewCartLine) -> CartSnapshot:
        """Add a product, merging into the existing line for the same product."""
        incoming = CartLine.from_new(line)
        return self._commit(_merge(self.lines, [incoming]))

    def remove_line(self, line_id: str) -> CartSnapshot:
        return self._commit(line for line in self.lines if line.id != line_id)

    def set_quantity(self, line_id: str, quantity: int) -> CartSnapshot:
        """Set a line's quantity, clamped to at least 1."""
        return self._commit(
            line.with_quantity(quantity) if line.id == line_id else line
            for line in self.lines
        )

    def clear(self) -> CartSnapshot:
        return self._commit(())

    def merge(self, lines: Iterable[CartLine]) -> CartSnapshot:
        """Fold another cart's lines into this one (e.g. guest cart on login)."""
        return self._commit(_merge(self.lines, lines))

    # --- Internal helpers -----------------------------------------------------

    def _commit(self, lines: Iterable[CartLine]) -> CartSnapshot:
        self._snapshot = CartSnapshot.of(lines)
        self._store.save(list(self._snapshot.lines))
        return self._snapshot


def _merge(current: Iterable[CartLine], incoming: Iterable[CartLine]) -> list[CartLine]:
    merged = list(current)
    for new in incoming:
        for i, existing in enumerate(merged):
            if existing.product_id == new.product_id:
                merged[i] = existing.with_quantity(existing.quantity + new.quantity)
                break
        else:
            merged.append(new)
    return merged


def open_cart(
    store_for: Callable[[str], CartStore],
    principal: Principal | None,
) -> CartAggregator:
    """Open the cart for a principal, absorbing any guest cart on login."""
    cart = CartAggregator.restore(store_for(cart_key(principal)))
    if principal is None:
        return cart

    guest_store = store_for(GUEST_CART_KEY)
    guest = CartAggregator.restore(guest_store)
    if guest.lines:
        logger.info(
            "guest_cart_merged",
            principal_id=principal.id,
            lines=len(guest.lines),
        )
        cart.merge(guest.lines)
        guest_store.discard()
    return cart
