"""Gateway semantics over a whole-store snapshot of record collections.

Subclasses only decide how the snapshot is read and written. Queries,
relation includes, constraint checks and the all-or-nothing transaction
live here: a transaction applies its ops to a deep copy of the snapshot,
validates the result and hands the copy to ``_persist`` in one call, so a
failing op never leaves anything behind.
"""

from __future__ import annotations

import copy
import uuid
from abc import abstractmethod
from dataclasses import dataclass
from typing import Sequence

from shopcore.domain.exceptions import PersistenceError
from shopcore.domain.repository.gateway import (
    Delete,
    Insert,
    PersistenceGateway,
    Record,
    Update,
    WriteOp,
)

Store = dict[str, list[Record]]


@dataclass(frozen=True)
class Relation:
    target: str
    local_field: str
    remote_field: str
    many: bool


RELATIONS: dict[tuple[str, str], Relation] = {
    ("orders", "customer"): Relation("users", "customer_id", "id", many=False),
    ("orders", "items"): Relation("order_items", "id", "order_id", many=True),
    ("order_items", "product"): Relation("products", "product_id", "id", many=False),
    ("order_items", "order"): Relation("orders", "order_id", "id", many=False),
    ("users", "orders"): Relation("orders", "id", "customer_id", many=True),
    ("categories", "products"): Relation("products", "id", "category_id", many=True),
    ("categories", "children"): Relation("categories", "id", "parent_id", many=True),
    ("categories", "parent"): Relation("categories", "parent_id", "id", many=False),
}

UNIQUE_FIELDS: dict[str, tuple[str, ...]] = {
    "orders": ("order_number",),
    "users": ("email",),
    "categories": ("slug",),
    "products": ("sku",),
}

# (collection, field) -> referenced collection
FOREIGN_KEYS: dict[tuple[str, str], str] = {
    ("order_items", "order_id"): "orders",
}


class RecordStoreGateway(PersistenceGateway):

    # --- Storage hooks --------------------------------------------------------

    @abstractmethod
    def _load(self) -> Store:
        """Return the current snapshot of every collection."""

    @abstractmethod
    def _persist(self, store: Store) -> None:
        """Replace the stored snapshot in a single step."""

    # --- PersistenceGateway interface -----------------------------------------

    def next_id(self, collection: str) -> str:
        return uuid.uuid4().hex

    def count(self, collection: str, where: Record | None = None) -> int:
        return len(_matching(self._load().get(collection, []), where))

    def find_many(
        self,
        collection: str,
        where: Record | None = None,
        skip: int = 0,
        take: int | None = None,
        include: Sequence[str] = (),
        order_by: str | None = "-created_at",
    ) -> list[Record]:
        store = self._load()
        records = _matching(store.get(collection, []), where)
        if order_by:
            field_name = order_by.lstrip("-")
            records.sort(
                key=lambda r: (r.get(field_name) is not None, r.get(field_name) or ""),
                reverse=order_by.startswith("-"),
            )
        end = None if take is None else skip + take
        window = [copy.deepcopy(r) for r in records[skip:end]]
        for record in window:
            _resolve_includes(store, collection, record, include)
        return window

    def get(
        self,
        collection: str,
        record_id: str,
        include: Sequence[str] = (),
    ) -> Record | None:
        store = self._load()
        for raw in store.get(collection, []):
            if raw.get("id") == record_id:
                record = copy.deepcopy(raw)
                _resolve_includes(store, collection, record, include)
                return record
        return None

    def transaction(self, ops: Sequence[WriteOp]) -> None:
        try:
            working = copy.deepcopy(self._load())
            for index, op in enumerate(ops):
                self._apply(working, index, op)
            _check_constraints(working)
        except PersistenceError:
            raise
        except Exception as exc:
            raise PersistenceError(f"Transaction aborted: {exc}") from exc
        self._persist(working)

    # --- Op application -------------------------------------------------------

    def _apply(self, store: Store, index: int, op: WriteOp) -> None:
        records = store.setdefault(op.collection, [])
        if isinstance(op, Insert):
            record = dict(op.record)
            if not record.get("id"):
                record["id"] = self.next_id(op.collection)
            if any(r.get("id") == record["id"] for r in records):
                raise PersistenceError(
                    f"Duplicate id {record['id']!r} in {op.collection}"
                )
            records.append(record)
        elif isinstance(op, Update):
            target = _find(records, op.record_id, op.collection)
            target.update(op.changes)
        elif isinstance(op, Delete):
            target = _find(records, op.record_id, op.collection)
            records.remove(target)
        else:
            raise PersistenceError(f"Unsupported write op: {op!r}")


# --- Helpers ------------------------------------------------------------------


def _matching(records: list[Record], where: Record | None) -> list[Record]:
    if not where:
        return list(records)
    return [r for r in records if all(r.get(k) == v for k, v in where.items())]


def _find(records: list[Record], record_id: str, collection: str) -> Record:
    for record in records:
        if record.get("id") == record_id:
            return record
    raise PersistenceError(f"No record {record_id!r} in {collection}")


def _relation(collection: str, name: str) -> Relation:
    try:
        return RELATIONS[(collection, name)]
    except KeyError:
        raise PersistenceError(f"Unknown relation {collection}.{name}") from None


def _related(store: Store, relation: Relation, record: Record) -> list[Record]:
    key = record.get(relation.local_field)
    if key is None:
        return []
    return [
        r for r in store.get(relation.target, [])
        if r.get(relation.remote_field) == key
    ]


def _resolve_includes(
    store: Store, collection: str, record: Record, include: Sequence[str]
) -> None:
    for path in include:
        if path.startswith("_count."):
            name = path.split(".", 1)[1]
            relation = _relation(collection, name)
            record.setdefault("_count", {})[name] = len(_related(store, relation, record))
            continue

        name, _, rest = path.partition(".")
        relation = _relation(collection, name)
        if name not in record or not isinstance(record[name], (dict, list)):
            related = [copy.deepcopy(r) for r in _related(store, relation, record)]
            if relation.many:
                record[name] = related
            else:
                record[name] = related[0] if related else None

        if rest:
            children = record[name] if relation.many else [record[name]]
            for child in children:
                if child is not None:
                    _resolve_includes(store, relation.target, child, [rest])


def _check_constraints(store: Store) -> None:
    for collection, unique in UNIQUE_FIELDS.items():
        for field_name in unique:
            seen: set = set()
            for record in store.get(collection, []):
                value = record.get(field_name)
                if value is None:
                    continue
                if value in seen:
                    raise PersistenceError(
                        f"Unique constraint failed on {collection}.{field_name}: {value!r}"
                    )
                seen.add(value)

    for (collection, field_name), target in FOREIGN_KEYS.items():
        known = {r.get("id") for r in store.get(target, [])}
        for record in store.get(collection, []):
            if record.get(field_name) not in known:
                raise PersistenceError(
                    f"Foreign key failed on {collection}.{field_name}: "
                    f"{record.get(field_name)!r}"
                )
