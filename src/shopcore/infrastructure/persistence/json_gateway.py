"""JSON-file-backed implementation of PersistenceGateway.

Every collection lives in one file so a transaction touching orders and
order items is a single file replacement: the new snapshot is written to
a temp file next to the store and ``os.replace``-d over it.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from shopcore.domain.exceptions import PersistenceError
from shopcore.infrastructure.persistence.record_store import RecordStoreGateway, Store


class JsonFileGateway(RecordStoreGateway):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> Store:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read store {self._file_path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise PersistenceError(f"Store {self._file_path} is not a JSON object")
        return raw

    def _persist(self, store: Store) -> None:
        payload = json.dumps(store, indent=2) + "\n"
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._file_path.name}.", dir=self._file_path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write store {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("{}", encoding="utf-8")
