"""JSON-file-backed implementation of CartStore.

One file per cart key (``cart_<user id>`` or ``cart_guest``) under the
carts directory.
"""

from __future__ import annotations

import json
from decimal import Decimal, InvalidOperation
from pathlib import Path

from shopcore.domain.exceptions import CartStateCorrupt, ValidationError
from shopcore.domain.model.cart import CartLine
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.cart_store import CartStore


class JsonCartStore(CartStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartStore interface --------------------------------------------------

    def load(self) -> list[CartLine]:
        if not self._file_path.exists():
            return []
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return [self._to_domain(item) for item in raw]
        except (OSError, ValueError, TypeError, KeyError, InvalidOperation, ValidationError) as exc:
            raise CartStateCorrupt(f"{self._file_path.name}: {exc}") from exc

    def save(self, lines: list[CartLine]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(
            json.dumps([self._to_raw(line) for line in lines], indent=2) + "\n",
            encoding="utf-8",
        )

    def discard(self) -> None:
        self._file_path.unlink(missing_ok=True)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        return {
            "id": line.id,
            "product_id": line.product_id,
            "name": line.name,
            "price": str(line.unit_price.amount),
            "currency": line.unit_price.currency,
            "quantity": line.quantity,
            "sku": line.sku,
            "image": line.image_ref,
        }

    @staticmethod
    def _to_domain(raw: dict) -> CartLine:
        quantity = int(raw["quantity"])
        if quantity < 1:
            raise ValueError(f"line {raw['id']!r} has quantity {quantity}")
        return CartLine(
            id=str(raw["id"]),
            product_id=str(raw["product_id"]),
            name=raw["name"],
            unit_price=Money(Decimal(str(raw["price"])), raw.get("currency", "USD")),
            quantity=quantity,
            sku=raw.get("sku") or "",
            image_ref=raw.get("image"),
        )


def cart_store_factory(carts_dir: Path):
    """Return a ``key -> CartStore`` callable rooted at ``carts_dir``."""

    def store_for(key: str) -> JsonCartStore:
        return JsonCartStore(carts_dir / f"{key}.json")

    return store_for
