# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Security audit trail for the admin area, written to the application log."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from portfolio_admin.shared.logging import logger


class AuditAction(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_BLOCKED = "login_blocked"
    LOGOUT = "logout"
    PASSWORD_CHANGED = "password_changed"
    RATE_LIMIT_CLEARED = "rate_limit_cleared"
    MAINTENANCE_RUN = "maintenance_run"
    CONTENT_DELETED = "content_deleted"


# Denied attempts at these log as warnings
_ALERTING_ACTIONS = frozenset(
    {
        AuditAction.LOGIN_FAILED,
        AuditAction.LOGIN_BLOCKED,
        AuditAction.PASSWORD_CHANGED,
        AuditAction.CONTENT_DELETED,
    }
)
_SECRET_KEY_FRAGMENTS = ("password", "token", "secret", "hash", "cookie")

_audit_logger = logger.bind(audit=True)


def _redact(details: Mapping[str, Any]) -> dict[str, Any]:
    return {
        key: "***REDACTED***" if any(f in key.lower() for f in _SECRET_KEY_FRAGMENTS) else value
        for key, value in details.items()
    }


def audit_log(
    action: AuditAction,
    user_id: str | None = None,
    ip_address: str | None = None,
    details: Mapping[str, Any] | None = None,
    success: bool = True,
) -> None:
    parts = [
        f"AUDIT {action.value}",
        f"outcome={'ok' if success else 'denied'}",
        f"user={user_id or '-'}",
        f"ip={ip_address or '-'}",
    ]
    if details:
        parts.append(f"details={_redact(details)}")

    level = "WARNING" if not success and action in _ALERTING_ACTIONS else "INFO"
    _audit_logger.log(level, " ".join(parts))


__all__ = ["AuditAction", "audit_log"]
