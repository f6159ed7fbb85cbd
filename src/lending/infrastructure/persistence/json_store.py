"""Shared file handling for the JSON-file-backed repositories.

Each repository owns one JSON file holding a list of records.  Every
read-modify-write happens under the store's lock, which makes each
repository call atomic at the single-record level within a process.
I/O and decoding failures surface as StorageError.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from threading import RLock

from lending.domain.exceptions import StorageError


class JsonRecordStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = RLock()
        self._ensure_file()

    # --- Record helpers -------------------------------------------------------

    def _find_raw(self, predicate: Callable[[dict], bool]) -> list[dict]:
        return [raw for raw in self._load_raw() if predicate(raw)]

    def _upsert_raw(self, record: dict) -> int:
        """Replace the record with the same id, or append with a new id."""
        with self._lock:
            records = self._load_raw()
            if record.get("id") is None:
                record["id"] = max((r["id"] for r in records), default=0) + 1
                records.append(record)
            else:
                for i, raw in enumerate(records):
                    if raw["id"] == record["id"]:
                        records[i] = record
                        break
                else:
                    records.append(record)
            self._persist_raw(records)
            return record["id"]

    def _update_raw(self, record_id: int, mutate: Callable[[dict], bool]) -> bool:
        """Apply ``mutate`` to one stored record; persist only if it returns True."""
        with self._lock:
            records = self._load_raw()
            for raw in records:
                if raw["id"] == record_id:
                    if not mutate(raw):
                        return False
                    self._persist_raw(records)
                    return True
            return False

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        with self._lock:
            try:
                return json.loads(self._file_path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise StorageError(f"Cannot read {self._file_path}: {exc}") from exc

    def _persist_raw(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise StorageError(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            try:
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
            except OSError as exc:
                raise StorageError(f"Cannot create {self._file_path}: {exc}") from exc
