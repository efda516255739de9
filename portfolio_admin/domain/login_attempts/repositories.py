# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar

from .entities import LoginAttemptEntry

# A mutation that always returns an entry makes `update` return one too
EntryT = TypeVar("EntryT", bound=LoginAttemptEntry | None)
EntryMutation = Callable[[LoginAttemptEntry | None], EntryT]


class LoginAttemptRepository(Protocol):
    def get(self, address: str) -> LoginAttemptEntry | None: ...
    def put(self, entry: LoginAttemptEntry) -> None: ...
    def delete(self, address: str) -> bool: ...
    def delete_where(self, predicate: Callable[[LoginAttemptEntry], bool]) -> int: ...
    def list_by(
        self, predicate: Callable[[LoginAttemptEntry], bool] | None = None
    ) -> list[LoginAttemptEntry]: ...

    def update(self, address: str, mutate: EntryMutation[EntryT]) -> EntryT:
        """Apply ``mutate`` to the stored entry atomically; returning None deletes it."""
        ...
