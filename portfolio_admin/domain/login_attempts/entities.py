# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta


@dataclass(slots=True, frozen=True)
class LimiterPolicy:
    max_attempts: int = 5
    window: timedelta = timedelta(minutes=15)
    block_duration: timedelta = timedelta(minutes=30)
    cleanup_interval: timedelta = timedelta(minutes=5)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be positive")
        if self.window <= timedelta(0) or self.block_duration <= timedelta(0):
            raise ValueError("window and block_duration must be positive")


@dataclass(slots=True)
class LoginAttemptEntry:
    """Failure counter for one source address."""

    address: str
    attempts: int
    first_attempt: datetime
    last_attempt: datetime
    blocked_until: datetime | None = None

    def is_blocked(self, now: datetime) -> bool:
        return self.blocked_until is not None and now < self.blocked_until

    def window_elapsed(self, now: datetime, window: timedelta) -> bool:
        return self.first_attempt < now - window


@dataclass(slots=True, frozen=True)
class BlockStatus:
    blocked: bool
    remaining_minutes: int | None = None
    blocked_until: datetime | None = None


@dataclass(slots=True, frozen=True)
class AttemptOutcome:
    blocked: bool
    attempts_left: int | None = None
    blocked_until: datetime | None = None


@dataclass(slots=True, frozen=True)
class RateLimitInfo:
    attempts: int
    max_attempts: int
    window_seconds: float
    attempts_left: int
    reset_time: datetime | None = None
