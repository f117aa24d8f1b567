"""Shared plumbing for the JSON-file repositories.

Each repository keeps one list of records in one file. All access to a
given file goes through one lock, looked up by resolved path, and writes
land in a temporary file that atomically replaces the original.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

_registry_guard = threading.Lock()
_file_locks: dict[Path, threading.RLock] = {}


def file_lock(path: Path) -> threading.RLock:
    key = path.resolve()
    with _registry_guard:
        lock = _file_locks.get(key)
        if lock is None:
            lock = _file_locks[key] = threading.RLock()
        return lock


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = file_lock(file_path)
        self._ensure_file()

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        fd, temp_path = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.stem}_", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(records, f, indent=2)
                f.write("\n")
            os.replace(temp_path, self._file_path)
        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")

    @staticmethod
    def _upsert(records: list[dict], raw: dict, key: str) -> None:
        """Replace the record with the same *key*, or append."""
        for i, existing in enumerate(records):
            if existing[key] == raw[key]:
                records[i] = raw
                return
        records.append(raw)
