# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""File storage adapters."""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol

from portfolio_admin.shared.errors import StorageError
from portfolio_admin.shared.logging import logger
from portfolio_admin.utils.jsonio import read_json_list_of_dicts, write_json_list

Record = dict[str, Any]

_FILE_LOCKS: dict[Path, threading.RLock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(path)
        if lock is None:
            lock = threading.RLock()
            _FILE_LOCKS[path] = lock
        return lock


class JsonRecordStore:
    """A JSON array of records on disk, keyed by one field.

    Every read-modify-write cycle holds a per-file lock and ends with an
    atomic replace, so writers in one process never lose each other's updates.
    """

    def __init__(self, path: str | Path, *, key: str) -> None:
        self._path = Path(path).resolve()
        self._key = key
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Record]:
        try:
            return read_json_list_of_dicts(self._path)
        except OSError:
            logger.exception(f"storage: failed to read {self._path}, treating as empty")
            return []

    def _save(self, records: list[Record]) -> None:
        try:
            write_json_list(self._path, records)
        except OSError as exc:
            logger.exception(f"storage: failed to write {self._path}")
            raise StorageError(self._path.name) from exc
        logger.debug(f"storage: wrote {len(records)} records to {self._path.name}")

    @contextmanager
    def transaction(self) -> Iterator[list[Record]]:
        with self._lock:
            records = self.load()
            original = copy.deepcopy(records)
            yield records
            if records != original:
                self._save(records)

    def get(self, key_value: str) -> Record | None:
        with self._lock:
            for record in self.load():
                if record.get(self._key) == key_value:
                    return record
        return None

    def put(self, record: Record) -> None:
        key_value = record[self._key]
        with self.transaction() as records:
            for idx, existing in enumerate(records):
                if existing.get(self._key) == key_value:
                    records[idx] = record
                    break
            else:
                records.append(record)

    def delete(self, key_value: str) -> bool:
        return self.delete_where(lambda record: record.get(self._key) == key_value) > 0

    def delete_where(self, predicate: Callable[[Record], bool]) -> int:
        with self._lock:
            records = self.load()
            kept = [record for record in records if not predicate(record)]
            removed = len(records) - len(kept)
            if removed:
                self._save(kept)
            return removed

    def list_by(self, predicate: Callable[[Record], bool] | None = None) -> list[Record]:
        with self._lock:
            records = self.load()
        if predicate is None:
            return records
        return [record for record in records if predicate(record)]


class ContentStoragePort(Protocol):
    def list_files(self, suffix: str) -> list[str]: ...

    def exists(self, name: str) -> bool: ...

    def delete(self, name: str) -> None: ...


class LocalContentStorage(ContentStoragePort):
    """Blog content files on the local filesystem within a configured root."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def _resolve(self, relative_path: str) -> Path:
        root = self._root.resolve()
        path = (root / relative_path).resolve()
        if path.parent != root:
            msg = "Attempted directory traversal outside content root"
            raise ValueError(msg)
        return path

    def list_files(self, suffix: str) -> list[str]:
        if not self._root.is_dir():
            return []
        return sorted(p.name for p in self._root.iterdir() if p.is_file() and p.name.endswith(suffix))

    def exists(self, name: str) -> bool:
        return self._resolve(name).is_file()

    def delete(self, name: str) -> None:
        file_path = self._resolve(name)
        try:
            file_path.unlink()
        except OSError as exc:
            logger.exception(f"storage: failed to delete {file_path}")
            raise StorageError(name) from exc
        logger.debug(f"storage: deleted path={file_path}")


__all__ = [
    "ContentStoragePort",
    "JsonRecordStore",
    "LocalContentStorage",
    "Record",
]
