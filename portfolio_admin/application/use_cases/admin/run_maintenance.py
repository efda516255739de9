# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.infrastructure.auth.login_attempts import LoginAttemptLimiter


class RunMaintenanceUseCase:
    """Sweep expired sessions and stale limiter entries in one pass."""

    def __init__(self, *, store: CredentialStore, limiter: LoginAttemptLimiter) -> None:
        self._store = store
        self._limiter = limiter

    def execute(self) -> dict[str, int]:
        return {
            "expired_sessions": self._store.cleanup_expired_sessions(),
            "stale_rate_limits": self._limiter.cleanup(),
        }


__all__ = ["RunMaintenanceUseCase"]
