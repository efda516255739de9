# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from .entities import Session, TokenClaims, User


class UserRepository(Protocol):
    def get(self, user_id: str) -> User | None: ...
    def find_by_username(self, username: str) -> User | None: ...
    def put(self, user: User) -> None: ...
    def add_if_username_free(self, user: User) -> bool: ...
    def list_by(self, predicate: Callable[[User], bool] | None = None) -> list[User]: ...


class SessionRepository(Protocol):
    def get(self, token: str) -> Session | None: ...
    def get_active(self, token: str, now: datetime) -> Session | None: ...
    def put(self, session: Session) -> None: ...
    def delete(self, token: str) -> bool: ...
    def delete_expired(self, now: datetime) -> int: ...
    def list_by(self, predicate: Callable[[Session], bool] | None = None) -> list[Session]: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenSigner(Protocol):
    def sign(self, claims: TokenClaims) -> str: ...
    def decode(self, token: str) -> TokenClaims: ...
