# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"
ROLE_VIEWER = "viewer"
ROLE_USER = "user"

PERMISSIONS = ("read", "write", "delete", "manage_users", "manage_settings")

ROLE_PERMISSIONS: dict[str, frozenset[str]] = {
    ROLE_ADMIN: frozenset(PERMISSIONS),
    ROLE_EDITOR: frozenset({"read", "write"}),
    ROLE_VIEWER: frozenset({"read"}),
}


@dataclass(slots=True, frozen=True)
class User:

    id: str
    username: str
    password_hash: str
    role: str
    created_at: datetime
    updated_at: datetime | None = None

    def has_permission(self, permission: str) -> bool:
        return permission in ROLE_PERMISSIONS.get(self.role, frozenset())

    def permissions(self) -> list[str]:
        return [p for p in PERMISSIONS if self.has_permission(p)]


@dataclass(slots=True, frozen=True)
class Session:

    id: str
    user_id: str
    token: str
    expires_at: datetime
    created_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Payload carried inside a signed session token."""

    user_id: str
    username: str
    issued_at: datetime
    expires_at: datetime
