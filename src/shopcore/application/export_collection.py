"""Application service: Bulk Export use case.

Exports a whole collection as flat rows without ever holding more than
one chunk of hydrated records at a time:

1. count the collection and refuse outright if it is above the ceiling,
   before any bulk read happens;
2. lay out a ``ChunkPlan`` of ``skip/take`` windows;
3. fold over the plan, fetching, projecting and appending one window at
   a time.

The caller is expected to have checked the admin role already.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

import structlog

from shopcore.application.dto import ExportResult
from shopcore.application.export_projections import (
    EXPORT_PROJECTIONS,
    ExportProjection,
    ExportRecord,
)
from shopcore.domain.exceptions import DatasetTooLarge, ValidationError
from shopcore.domain.repository.gateway import PersistenceGateway

logger = structlog.get_logger(__name__)

DEFAULT_SIZE_CEILING = 10_000
DEFAULT_CHUNK_SIZE = 1_000


@dataclass(frozen=True)
class ChunkWindow:
    index: int
    skip: int
    take: int


@dataclass(frozen=True)
class ChunkPlan:
    """Finite, restartable sequence of windows covering ``total`` records."""

    total: int
    chunk_size: int

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValidationError("Chunk size must be positive")
        if self.total < 0:
            raise ValidationError("Total cannot be negative")

    def __len__(self) -> int:
        return -(-self.total // self.chunk_size)

    def __iter__(self) -> Iterator[ChunkWindow]:
        for index in range(len(self)):
            skip = index * self.chunk_size
            yield ChunkWindow(index, skip, min(self.chunk_size, self.total - skip))


def accumulate(chunks: Iterable[list[ExportRecord]]) -> list[ExportRecord]:
    rows: list[ExportRecord] = []
    for chunk in chunks:
        rows.extend(chunk)
    return rows


class BulkExportHandler:

    def __init__(
        self,
        gateway: PersistenceGateway,
        size_ceiling: int = DEFAULT_SIZE_CEILING,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        projections: dict[str, ExportProjection] | None = None,
    ) -> None:
        self._gateway = gateway
        self._size_ceiling = size_ceiling
        self._chunk_size = chunk_size
        self._projections = projections or EXPORT_PROJECTIONS

    def handle(self, entity_type: str) -> ExportResult:
        projection = self._projections.get(entity_type)
        if projection is None:
            raise ValidationError(
                f"Unknown export type {entity_type!r}; "
                f"expected one of {', '.join(sorted(self._projections))}"
            )

        total = self._gateway.count(projection.collection)
        if total > self._size_ceiling:
            logger.warning(
                "export_refused",
                entity_type=entity_type,
                total=total,
                ceiling=self._size_ceiling,
            )
            raise DatasetTooLarge(entity_type, total, self._size_ceiling)

        plan = ChunkPlan(total, self._chunk_size)
        rows = accumulate(self._fetch(projection, window) for window in plan)

        logger.info(
            "export_prepared",
            entity_type=entity_type,
            total=total,
            rows=len(rows),
            chunks=len(plan),
        )
        return ExportResult(entity_type=entity_type, data=rows, total=total)

    def _fetch(self, projection: ExportProjection, window: ChunkWindow) -> list[ExportRecord]:
        records = self._gateway.find_many(
            projection.collection,
            skip=window.skip,
            take=window.take,
            include=projection.include,
            order_by="-created_at",
        )
        return [projection.project(record) for record in records]
