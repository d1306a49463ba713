"""Abstract persistence gateway over flat record collections.

Records are plain dicts keyed by field name. The core only ever talks to
storage through this contract, so any engine that can honour
``transaction()`` as all-or-nothing can sit behind it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Sequence, Union

Record = dict[str, Any]


@dataclass(frozen=True)
class Insert:
    collection: str
    record: Record


@dataclass(frozen=True)
class Update:
    collection: str
    record_id: str
    changes: Record = field(default_factory=dict)


@dataclass(frozen=True)
class Delete:
    collection: str
    record_id: str


WriteOp = Union[Insert, Update, Delete]


class PersistenceGateway(ABC):

    @abstractmethod
    def next_id(self, collection: str) -> str:
        """Generate a fresh unique record id for the collection."""

    @abstractmethod
    def count(self, collection: str, where: Record | None = None) -> int:
        """Number of records matching every field in ``where``."""

    @abstractmethod
    def find_many(
        self,
        collection: str,
        where: Record | None = None,
        skip: int = 0,
        take: int | None = None,
        include: Sequence[str] = (),
        order_by: str | None = "-created_at",
    ) -> list[Record]:
        """Return one window of matching records with relations joined.

        ``include`` entries name relations (``"items"``), nested relations
        (``"items.product"``) or relation counts (``"_count.orders"``).
        ``order_by`` is a field name, prefixed with ``-`` for descending.
        """

    @abstractmethod
    def get(
        self,
        collection: str,
        record_id: str,
        include: Sequence[str] = (),
    ) -> Record | None:
        """Return a single record by id, or None."""

    @abstractmethod
    def transaction(self, ops: Sequence[WriteOp]) -> None:
        """Apply every op or none of them.

        Raises PersistenceError if any op fails; in that case no op is
        visible afterwards.
        """
