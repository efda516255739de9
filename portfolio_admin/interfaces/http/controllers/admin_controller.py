# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from portfolio_admin.application.use_cases.admin.rate_limits import (
    ClearRateLimitUseCase,
    GetRateLimitStatsUseCase,
)
from portfolio_admin.application.use_cases.admin.run_maintenance import RunMaintenanceUseCase
from portfolio_admin.domain.users.entities import ROLE_ADMIN
from portfolio_admin.infrastructure.audit import AuditAction, audit_log
from portfolio_admin.infrastructure.auth.client_address import current_client_ip
from portfolio_admin.infrastructure.auth_middleware import AuthGuard
from portfolio_admin.interfaces.http.dto.admin import MaintenanceResultDTO, RateLimitStatsDTO
from portfolio_admin.shared.logging import logger


class AdminController:
    def __init__(
        self,
        *,
        get_rate_limit_stats: GetRateLimitStatsUseCase,
        clear_rate_limit: ClearRateLimitUseCase,
        run_maintenance: RunMaintenanceUseCase,
        guard: AuthGuard,
    ) -> None:
        self._get_rate_limit_stats = get_rate_limit_stats
        self._clear_rate_limit = clear_rate_limit
        self._run_maintenance = run_maintenance
        self._guard = guard

    def rate_limits(self) -> tuple[Response, int]:
        stats = RateLimitStatsDTO.model_validate(self._get_rate_limit_stats.execute())
        return jsonify(stats.model_dump()), 200

    def clear_rate_limit(self, address: str) -> tuple[Response, int]:
        user = g.user
        cleared = self._clear_rate_limit.execute(address, actor=user.username)
        audit_log(
            AuditAction.RATE_LIMIT_CLEARED,
            user_id=user.id,
            ip_address=current_client_ip(),
            details={"target_ip": address, "cleared": cleared},
        )
        return jsonify({"ok": True, "cleared": cleared}), 200

    def maintenance(self) -> tuple[Response, int]:
        result = MaintenanceResultDTO.model_validate(self._run_maintenance.execute())
        audit_log(
            AuditAction.MAINTENANCE_RUN,
            user_id=g.user.id,
            ip_address=current_client_ip(),
            details=result.model_dump(),
        )
        logger.info(
            f"admin.maintenance: expired_sessions={result.expired_sessions} "
            f"stale_rate_limits={result.stale_rate_limits}"
        )
        return jsonify(result.model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("admin", __name__, url_prefix="/api/admin")
        admin_only = self._guard.api(ROLE_ADMIN)
        bp.add_url_rule(
            "/rate-limits",
            endpoint="rate_limits",
            view_func=admin_only(self.rate_limits),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/rate-limits/<path:address>",
            endpoint="clear_rate_limit",
            view_func=admin_only(self.clear_rate_limit),
            methods=["DELETE"],
        )
        bp.add_url_rule(
            "/maintenance/cleanup",
            endpoint="maintenance",
            view_func=admin_only(self.maintenance),
            methods=["POST"],
        )
        return bp
