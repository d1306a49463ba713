"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON-backed
adapters but keep everything in memory. No file I/O, no side effects.
"""

from __future__ import annotations

import copy
import threading

from shopcore.domain.exceptions import CartStateCorrupt, PersistenceError
from shopcore.domain.model.cart import CartLine
from shopcore.domain.model.invoice import InvoiceLayout
from shopcore.domain.model.order import Address, Order, OrderItem, ProductRef
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.repository.cart_store import CartStore
from shopcore.domain.service.document_renderer import DocumentRenderer
from shopcore.infrastructure.persistence.record_store import RecordStoreGateway, Store


class FakeGateway(RecordStoreGateway):
    """Record store kept in a dict.

    ``fail_on_op`` makes the transaction blow up when it reaches the op
    with that index, after the earlier ops were already applied to the
    working copy. ``fetches`` logs every ``find_many`` window.
    """

    def __init__(self, store: Store | None = None) -> None:
        self._store: Store = copy.deepcopy(store) if store else {}
        self._counter = 0
        self.fail_on_op: int | None = None
        self.fetches: list[tuple[str, int, int | None]] = []
        self.commits = 0

    def _load(self) -> Store:
        return self._store

    def _persist(self, store: Store) -> None:
        self._store = store
        self.commits += 1

    def next_id(self, collection: str) -> str:
        self._counter += 1
        return f"{collection}-{self._counter}"

    def find_many(self, collection, where=None, skip=0, take=None, include=(), order_by="-created_at"):
        self.fetches.append((collection, skip, take))
        return super().find_many(collection, where, skip, take, include, order_by)

    def _apply(self, store, index, op) -> None:
        if index == self.fail_on_op:
            raise PersistenceError(f"Injected failure at op {index}")
        super()._apply(store, index, op)

    # --- Test helpers ---------------------------------------------------------

    def records(self, collection: str) -> list[dict]:
        return copy.deepcopy(self._store.get(collection, []))

    def seed(self, collection: str, records: list[dict]) -> None:
        self._store.setdefault(collection, []).extend(copy.deepcopy(records))


class InMemoryCartStore(CartStore):

    def __init__(self, lines: list[CartLine] | None = None, corrupt: bool = False) -> None:
        self.lines: list[CartLine] = list(lines or [])
        self.corrupt = corrupt
        self.saves = 0
        self.discarded = False

    def load(self) -> list[CartLine]:
        if self.corrupt:
            raise CartStateCorrupt("unreadable cart")
        return list(self.lines)

    def save(self, lines: list[CartLine]) -> None:
        self.lines = list(lines)
        self.corrupt = False
        self.saves += 1

    def discard(self) -> None:
        self.lines = []
        self.discarded = True


class CartStoreRegistry:
    """``key -> CartStore`` callable that hands out one store per key."""

    def __init__(self) -> None:
        self.stores: dict[str, InMemoryCartStore] = {}

    def __call__(self, key: str) -> InMemoryCartStore:
        return self.stores.setdefault(key, InMemoryCartStore())


# --- Renderers ----------------------------------------------------------------


class FixedRenderer(DocumentRenderer):

    name = "fixed"

    def __init__(self, content: bytes) -> None:
        self.content = content
        self.calls = 0

    def render(self, layout: InvoiceLayout) -> bytes:
        self.calls += 1
        return self.content


class ExplodingRenderer(DocumentRenderer):

    name = "exploding"

    def render(self, layout: InvoiceLayout) -> bytes:
        raise RuntimeError("font table missing")


class SlowRenderer(DocumentRenderer):
    """Blocks until ``release`` is set (or a safety timeout passes)."""

    name = "slow"

    def __init__(self) -> None:
        self.release = threading.Event()

    def render(self, layout: InvoiceLayout) -> bytes:
        self.release.wait(timeout=5)
        return b"%PDF-late"


# --- Builders -----------------------------------------------------------------


def billing_info(**overrides) -> dict:
    info = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "address": "12 Analytical Row",
        "city": "London",
        "zipCode": "N1 9GU",
        "country": "UK",
        "phone": "555-0101",
    }
    info.update(overrides)
    return info


def make_order(
    items=(("p1", 2, "10.00"),),
    pricing=None,
    order_id: str = "o1",
    customer_id: str = "u1",
    notes: str | None = None,
    **billing,
) -> Order:
    """Build an Order from ``(product_id, quantity, price)`` tuples."""
    return Order.create(
        order_id=order_id,
        order_number="ORD-1700000000000-ABC123XYZ",
        customer_id=customer_id,
        items=[
            OrderItem(
                id=f"{order_id}-i{n}",
                order_id=order_id,
                product_id=product_id,
                quantity=Quantity(qty),
                price=Money.of(price),
                product=ProductRef(
                    id=product_id, name=f"Product {product_id.upper()}", sku=f"SKU-{product_id}"
                ),
            )
            for n, (product_id, qty, price) in enumerate(items, start=1)
        ],
        billing_address=Address.from_mapping(billing_info(**billing)),
        pricing=pricing,
        notes=notes,
    )
