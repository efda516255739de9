# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from dataclasses import dataclass

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.domain.login_attempts.exceptions import LoginBlockedError
from portfolio_admin.domain.users.entities import User
from portfolio_admin.domain.users.exceptions import InvalidCredentialsError, UserNotFoundError
from portfolio_admin.infrastructure.auth.login_attempts import LoginAttemptLimiter
from portfolio_admin.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: User
    token: str


class LoginUserUseCase:
    def __init__(self, *, store: CredentialStore, limiter: LoginAttemptLimiter) -> None:
        self._store = store
        self._limiter = limiter

    def execute(self, username: str, password: str, address: str) -> LoginResult:
        status = self._limiter.check_blocked(address)
        if status.blocked:
            logger.warning(f"auth.login: rejected blocked ip={address} user={username}")
            raise LoginBlockedError(
                remaining_minutes=status.remaining_minutes or 1,
                blocked_until=status.blocked_until,
            )

        try:
            user = self._store.authenticate(username, password)
        except (UserNotFoundError, InvalidCredentialsError):
            outcome = self._limiter.record_failure(address)
            if outcome.blocked:
                block_minutes = math.ceil(self._limiter.policy.block_duration.total_seconds() / 60)
                raise LoginBlockedError(
                    remaining_minutes=block_minutes, blocked_until=outcome.blocked_until
                ) from None
            # Unknown users and wrong passwords look the same to the caller
            raise InvalidCredentialsError(
                context={"attempts_left": outcome.attempts_left}
            ) from None

        self._limiter.record_success(address)
        token = self._store.issue_session(user.id)
        return LoginResult(user=user, token=token)


__all__ = ["LoginResult", "LoginUserUseCase"]
