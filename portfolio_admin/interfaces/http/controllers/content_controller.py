# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request

from portfolio_admin.application.use_cases.content.delete_content import (
    DeleteContentUseCase,
    ListContentUseCase,
)
from portfolio_admin.domain.users.entities import ROLE_ADMIN
from portfolio_admin.infrastructure.audit import AuditAction, audit_log
from portfolio_admin.infrastructure.auth.client_address import current_client_ip
from portfolio_admin.infrastructure.auth_middleware import AuthGuard
from portfolio_admin.interfaces.http.dto.content import (
    ContentListDTO,
    DeleteContentRequestDTO,
    DeleteContentResponseDTO,
)


class ContentController:
    def __init__(
        self,
        *,
        delete_content: DeleteContentUseCase,
        list_content: ListContentUseCase,
        guard: AuthGuard,
    ) -> None:
        self._delete_content = delete_content
        self._list_content = list_content
        self._guard = guard

    def delete(self) -> tuple[Response, int]:
        # The admin UI posts a form; API clients may send JSON
        payload = request.form.to_dict() if request.form else (request.get_json(silent=True) or {})
        filename = payload.get("filename") if isinstance(payload, dict) else None
        dto = DeleteContentRequestDTO(filename=filename if isinstance(filename, str) else None)

        user = g.user
        deleted = self._delete_content.execute(dto.filename, actor=user.username)

        audit_log(
            AuditAction.CONTENT_DELETED,
            user_id=user.id,
            ip_address=current_client_ip(),
            details={"filename": deleted},
        )
        result = DeleteContentResponseDTO(message=f"File {deleted} deleted successfully")
        return jsonify(result.model_dump()), 200

    def list(self) -> tuple[Response, int]:
        return jsonify(ContentListDTO(files=self._list_content.execute()).model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("content", __name__, url_prefix="/api/content")
        admin_only = self._guard.api(ROLE_ADMIN)
        bp.add_url_rule("", endpoint="list", view_func=admin_only(self.list), methods=["GET"])
        bp.add_url_rule(
            "/delete", endpoint="delete", view_func=admin_only(self.delete), methods=["POST"]
        )
        return bp
