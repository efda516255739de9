# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify

from portfolio_admin.domain.users.entities import ROLE_ADMIN
from portfolio_admin.infrastructure.auth_middleware import AuthGuard


class MiscController:
    def __init__(self, *, guard: AuthGuard) -> None:
        self._guard = guard

    def health(self) -> tuple[Response, int]:
        return jsonify({"status": "ok"}), 200

    def dashboard(self) -> tuple[Response, int]:
        # Page rendering lives in the static site; this only gates access
        user = g.user
        return jsonify({"user": {"id": user.id, "username": user.username, "role": user.role}}), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/health", endpoint="health", view_func=self.health, methods=["GET"])
        bp.add_url_rule(
            "/admin/dashboard",
            endpoint="dashboard",
            view_func=self._guard.browser(ROLE_ADMIN)(self.dashboard),
            methods=["GET"],
        )
        return bp
