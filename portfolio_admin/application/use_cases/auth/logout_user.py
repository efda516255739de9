"""Use-case for revoking sessions."""

from __future__ import annotations

from portfolio_admin.application.services.credential_store import CredentialStore


class LogoutUserUseCase:
    def __init__(self, *, store: CredentialStore) -> None:
        self._store = store

    def execute(self, token: str | None) -> None:
        if token:
            self._store.remove_session(token)
