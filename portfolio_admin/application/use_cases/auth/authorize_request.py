# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.domain.users.entities import User
from portfolio_admin.domain.users.exceptions import (
    InvalidTokenError,
    SessionNotFoundError,
    TokenExpiredError,
)
from portfolio_admin.shared.errors.base import ForbiddenError, UnauthorizedError


class AuthorizeRequestUseCase:
    """Resolve a bearer token to its user, checking token, session and role in turn."""

    def __init__(self, *, store: CredentialStore) -> None:
        self._store = store

    def execute(self, token: str | None, required_role: str | None = None) -> User:
        if not token:
            raise UnauthorizedError("missing_token")

        try:
            claims = self._store.verify_token(token)
            self._store.require_session(token)
        except (InvalidTokenError, TokenExpiredError, SessionNotFoundError) as exc:
            raise UnauthorizedError(exc.code) from None

        user = self._store.get_user_by_id(claims.user_id)
        if user is None:
            raise UnauthorizedError("user_not_found")

        if required_role is not None and user.role != required_role:
            raise ForbiddenError(required_role)

        return user


__all__ = ["AuthorizeRequestUseCase"]
