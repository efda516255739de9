# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import math
from datetime import datetime
from threading import Lock

from portfolio_admin.domain.clock import Clock, to_iso, utc_now
from portfolio_admin.domain.login_attempts.entities import (
    AttemptOutcome,
    BlockStatus,
    LimiterPolicy,
    LoginAttemptEntry,
    RateLimitInfo,
)
from portfolio_admin.domain.login_attempts.repositories import LoginAttemptRepository
from portfolio_admin.shared.errors import StorageError
from portfolio_admin.shared.logging import logger


class LoginAttemptLimiter:
    """Per-address brute-force guard: sliding failure window plus timed block.

    An address moves Clean -> Tracking -> Blocked and back to Clean once the
    block has elapsed and a later check prunes the entry.
    """

    def __init__(
        self,
        repository: LoginAttemptRepository,
        policy: LimiterPolicy | None = None,
        *,
        clock: Clock = utc_now,
    ) -> None:
        self._repository = repository
        self._policy = policy or LimiterPolicy()
        self._clock = clock
        self._cleanup_lock = Lock()
        self._last_cleanup: datetime | None = None

    @property
    def policy(self) -> LimiterPolicy:
        return self._policy

    def _now(self) -> datetime:
        return self._clock()

    def check_blocked(self, address: str) -> BlockStatus:
        now = self._now()
        self._maybe_cleanup(now)

        entry = self._repository.get(address)
        if entry is None or entry.blocked_until is None:
            return BlockStatus(blocked=False)

        if entry.is_blocked(now):
            remaining = math.ceil((entry.blocked_until - now).total_seconds() / 60)
            return BlockStatus(
                blocked=True,
                remaining_minutes=max(1, remaining),
                blocked_until=entry.blocked_until,
            )

        def _drop_if_block_elapsed(current: LoginAttemptEntry | None) -> LoginAttemptEntry | None:
            if current is not None and current.blocked_until is not None and not current.is_blocked(now):
                return None
            return current

        try:
            self._repository.update(address, _drop_if_block_elapsed)
        except StorageError:
            logger.error(f"login_attempts: could not prune expired block for ip={address}")
        else:
            logger.info(f"login_attempts: block expired for ip={address}")
        return BlockStatus(blocked=False)

    def record_failure(self, address: str) -> AttemptOutcome:
        now = self._now()
        policy = self._policy

        def _apply_failure(entry: LoginAttemptEntry | None) -> LoginAttemptEntry:
            if entry is None:
                return LoginAttemptEntry(
                    address=address, attempts=1, first_attempt=now, last_attempt=now
                )
            if entry.window_elapsed(now, policy.window):
                entry.attempts = 1
                entry.first_attempt = now
                entry.blocked_until = None
            else:
                entry.attempts += 1
                if entry.attempts >= policy.max_attempts:
                    entry.blocked_until = now + policy.block_duration
            entry.last_attempt = now
            return entry

        try:
            entry = self._repository.update(address, _apply_failure)
        except StorageError:
            logger.error(f"login_attempts: failure for ip={address} not persisted")
            return AttemptOutcome(blocked=False)

        if entry.is_blocked(now):
            logger.warning(
                f"login_attempts: ADDRESS BLOCKED ip={address} "
                f"failed_attempts={entry.attempts} "
                f"block_duration={policy.block_duration.total_seconds():.0f}s "
                f"blocked_until={to_iso(entry.blocked_until)}"  # type: ignore[arg-type]
            )
            return AttemptOutcome(blocked=True, blocked_until=entry.blocked_until)

        attempts_left = max(0, policy.max_attempts - entry.attempts)
        logger.info(
            f"login_attempts: failure recorded ip={address} attempts={entry.attempts} "
            f"attempts_left={attempts_left}"
        )
        return AttemptOutcome(blocked=False, attempts_left=attempts_left)

    def record_success(self, address: str) -> None:
        try:
            removed = self._repository.delete(address)
        except StorageError:
            logger.error(f"login_attempts: could not reset attempts for ip={address}")
            return
        if removed:
            logger.info(f"login_attempts: cleared attempts for ip={address}")

    def clear(self, address: str) -> bool:
        removed = self._repository.delete(address)
        if removed:
            logger.info(f"login_attempts: entry cleared manually for ip={address}")
        return removed

    def get_info(self, address: str) -> RateLimitInfo:
        now = self._now()
        policy = self._policy
        window_seconds = policy.window.total_seconds()

        entry = self._repository.get(address)
        if entry is None or entry.window_elapsed(now, policy.window):
            return RateLimitInfo(
                attempts=0,
                max_attempts=policy.max_attempts,
                window_seconds=window_seconds,
                attempts_left=policy.max_attempts,
            )

        return RateLimitInfo(
            attempts=entry.attempts,
            max_attempts=policy.max_attempts,
            window_seconds=window_seconds,
            attempts_left=max(0, policy.max_attempts - entry.attempts),
            reset_time=entry.first_attempt + policy.window,
        )

    def stats(self) -> list[dict]:
        now = self._now()
        result = []
        for entry in self._repository.list_by():
            within_window = not entry.window_elapsed(now, self._policy.window)
            result.append(
                {
                    "ip": entry.address,
                    "attempts": entry.attempts if within_window else 0,
                    "blocked": entry.is_blocked(now),
                    "first_attempt": to_iso(entry.first_attempt),
                    "last_attempt": to_iso(entry.last_attempt),
                    "blocked_until": to_iso(entry.blocked_until) if entry.blocked_until else None,
                }
            )
        return result

    def cleanup(self) -> int:
        now = self._now()
        cutoff = now - self._policy.window * 2

        try:
            removed = self._repository.delete_where(
                lambda entry: entry.last_attempt <= cutoff and not entry.is_blocked(now)
            )
        except StorageError:
            logger.error("login_attempts: cleanup skipped, storage unavailable")
            return 0
        if removed:
            logger.info(f"login_attempts: cleanup removed {removed} stale entries")
        return removed

    def _maybe_cleanup(self, now: datetime) -> None:
        with self._cleanup_lock:
            last = self._last_cleanup
            if last is not None and now - last < self._policy.cleanup_interval:
                return
            self._last_cleanup = now
        self.cleanup()


__all__ = ["LoginAttemptLimiter"]
