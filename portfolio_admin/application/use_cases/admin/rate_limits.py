# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.infrastructure.auth.login_attempts import LoginAttemptLimiter
from portfolio_admin.shared.logging import logger


class GetRateLimitStatsUseCase:
    def __init__(self, *, limiter: LoginAttemptLimiter) -> None:
        self._limiter = limiter

    def execute(self) -> dict:
        policy = self._limiter.policy
        return {
            "entries": self._limiter.stats(),
            "max_attempts": policy.max_attempts,
            "window_seconds": policy.window.total_seconds(),
            "block_seconds": policy.block_duration.total_seconds(),
        }


class ClearRateLimitUseCase:
    def __init__(self, *, limiter: LoginAttemptLimiter) -> None:
        self._limiter = limiter

    def execute(self, address: str, *, actor: str) -> bool:
        cleared = self._limiter.clear(address)
        logger.info(f"admin: rate limit clear ip={address} by user={actor} cleared={cleared}")
        return cleared


__all__ = ["ClearRateLimitUseCase", "GetRateLimitStatsUseCase"]
