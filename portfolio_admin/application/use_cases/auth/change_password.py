# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError


class ChangePasswordUseCase:
    def __init__(self, *, store: CredentialStore) -> None:
        self._store = store

    def execute(self, user_id: str, current_password: str, new_password: str) -> None:
        user = self._store.get_user_by_id(user_id)
        if user is None:
            raise UserNotFoundError()

        hasher = self._store.password_hasher
        if not hasher.verify(current_password, user.password_hash):
            raise InvalidCredentialsError()

        self._store.update_user_password(user_id, hasher.hash(new_password))


__all__ = ["ChangePasswordUseCase"]
