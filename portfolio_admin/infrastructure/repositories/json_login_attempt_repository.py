# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from portfolio_admin.domain.clock import parse_iso, to_iso
from portfolio_admin.domain.login_attempts.entities import LoginAttemptEntry
from portfolio_admin.domain.login_attempts.repositories import (
    EntryMutation,
    EntryT,
    LoginAttemptRepository,
)
from portfolio_admin.infrastructure.storage import JsonRecordStore, Record
from portfolio_admin.shared.logging import logger


def _entry_from_record(record: Record) -> LoginAttemptEntry | None:
    try:
        blocked_until = record.get("blockedUntil")
        return LoginAttemptEntry(
            address=str(record["ip"]),
            attempts=int(record["attempts"]),
            first_attempt=parse_iso(record["firstAttempt"]),
            last_attempt=parse_iso(record["lastAttempt"]),
            blocked_until=parse_iso(blocked_until) if blocked_until else None,
        )
    except (KeyError, TypeError, ValueError):
        logger.warning(f"login_attempts: skipping malformed record ip={record.get('ip')}")
        return None


def _entry_to_record(entry: LoginAttemptEntry) -> Record:
    record: Record = {
        "ip": entry.address,
        "attempts": entry.attempts,
        "firstAttempt": to_iso(entry.first_attempt),
        "lastAttempt": to_iso(entry.last_attempt),
    }
    if entry.blocked_until is not None:
        record["blockedUntil"] = to_iso(entry.blocked_until)
    return record


class JsonLoginAttemptRepository(LoginAttemptRepository):
    def __init__(self, path: str | Path) -> None:
        self._store = JsonRecordStore(path, key="ip")

    def get(self, address: str) -> LoginAttemptEntry | None:
        record = self._store.get(address)
        return _entry_from_record(record) if record else None

    def put(self, entry: LoginAttemptEntry) -> None:
        self._store.put(_entry_to_record(entry))

    def delete(self, address: str) -> bool:
        return self._store.delete(address)

    def delete_where(self, predicate: Callable[[LoginAttemptEntry], bool]) -> int:
        def _match(record: Record) -> bool:
            entry = _entry_from_record(record)
            return entry is None or predicate(entry)

        return self._store.delete_where(_match)

    def list_by(
        self, predicate: Callable[[LoginAttemptEntry], bool] | None = None
    ) -> list[LoginAttemptEntry]:
        entries = [e for e in map(_entry_from_record, self._store.list_by()) if e is not None]
        if predicate is None:
            return entries
        return [e for e in entries if predicate(e)]

    def update(self, address: str, mutate: EntryMutation[EntryT]) -> EntryT:
        with self._store.transaction() as records:
            idx = next(
                (i for i, record in enumerate(records) if record.get("ip") == address), None
            )
            current = _entry_from_record(records[idx]) if idx is not None else None
            updated = mutate(current)
            if idx is not None:
                del records[idx]
            if updated is not None:
                records.append(_entry_to_record(updated))
        return updated


__all__ = ["JsonLoginAttemptRepository"]
