from __future__ import annotations

from pydantic import BaseModel


class RateLimitEntryDTO(BaseModel):
    ip: str
    attempts: int
    blocked: bool
    first_attempt: str
    last_attempt: str
    blocked_until: str | None = None


class RateLimitStatsDTO(BaseModel):
    entries: list[RateLimitEntryDTO]
    max_attempts: int
    window_seconds: float
    block_seconds: float


class MaintenanceResultDTO(BaseModel):
    expired_sessions: int
    stale_rate_limits: int
