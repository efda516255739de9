# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from http import HTTPStatus

from portfolio_admin.domain.clock import to_iso
from portfolio_admin.shared.errors.base import AppError


class LoginBlockedError(AppError):
    def __init__(self, *, remaining_minutes: int, blocked_until: datetime | None = None) -> None:
        context: dict[str, object] = {"remaining_minutes": remaining_minutes}
        if blocked_until is not None:
            context["blocked_until"] = to_iso(blocked_until)
        super().__init__(
            code="login_blocked",
            status=HTTPStatus.TOO_MANY_REQUESTS,
            context=context,
        )
