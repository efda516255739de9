# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json

from flask import Blueprint, Response, g, jsonify, request

from portfolio_admin.application.use_cases.auth.change_password import ChangePasswordUseCase
from portfolio_admin.application.use_cases.auth.login_user import LoginUserUseCase
from portfolio_admin.application.use_cases.auth.logout_user import LogoutUserUseCase
from portfolio_admin.domain.login_attempts.exceptions import LoginBlockedError
from portfolio_admin.domain.users.exceptions import InvalidCredentialsError
from portfolio_admin.infrastructure.audit import AuditAction, audit_log
from portfolio_admin.infrastructure.auth.client_address import current_client_ip
from portfolio_admin.infrastructure.auth_middleware import USER_INFO_COOKIE, AuthGuard, extract_token
from portfolio_admin.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    ChangePasswordRequestDTO,
    LoginRequestDTO,
    UserDTO,
)
from portfolio_admin.shared.config.settings import AuthConfig, SecurityConfig
from portfolio_admin.shared.errors.validation import parse_payload
from portfolio_admin.shared.logging import logger


class AuthController:
    def __init__(
        self,
        *,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        change_password_use_case: ChangePasswordUseCase,
        guard: AuthGuard,
        auth_config: AuthConfig,
        security_config: SecurityConfig,
    ) -> None:
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._change_password_use_case = change_password_use_case
        self._guard = guard
        self._auth_config = auth_config
        self._security = security_config

    def login(self) -> tuple[Response, int]:
        dto = parse_payload(LoginRequestDTO, request.get_json(silent=True))

        ip_address = current_client_ip()

        try:
            result = self._login_use_case.execute(dto.username, dto.password, ip_address)
        except LoginBlockedError as exc:
            audit_log(
                AuditAction.LOGIN_BLOCKED,
                ip_address=ip_address,
                details={"username": dto.username, **dict(exc.context or {})},
                success=False,
            )
            raise
        except InvalidCredentialsError as exc:
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username, **dict(exc.context or {})},
                success=False,
            )
            raise

        audit_log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            details={"username": dto.username, "remember_me": dto.remember_me},
        )

        user = UserDTO(id=result.user.id, username=result.user.username, role=result.user.role)
        response = jsonify(AuthSuccessDTO(user=user).model_dump())

        max_age = int(self._auth_config.session_ttl.total_seconds()) if dto.remember_me else None
        response.set_cookie(
            self._guard.cookie_name,
            result.token,
            httponly=True,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=max_age,
            path="/",
        )
        response.set_cookie(
            USER_INFO_COOKIE,
            json.dumps({"username": user.username, "role": user.role}),
            httponly=False,
            samesite=self._security.cookie_samesite,
            secure=self._security.cookie_secure,
            max_age=max_age,
            path="/",
        )
        logger.info(f"auth.login: ok username={dto.username} remember_me={dto.remember_me}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        token = extract_token(request, self._guard.cookie_name)
        self._logout_use_case.execute(token)

        audit_log(AuditAction.LOGOUT, ip_address=current_client_ip(), details={})

        response = jsonify(AuthSuccessDTO().model_dump())
        response.delete_cookie(self._guard.cookie_name, path="/")
        response.delete_cookie(USER_INFO_COOKIE, path="/")
        logger.info("auth.logout: ok")
        return response, 200

    def me(self) -> tuple[Response, int]:
        user = g.user
        dto = UserDTO(
            id=user.id, username=user.username, role=user.role, permissions=user.permissions()
        )
        return jsonify(dto.model_dump()), 200

    def change_password(self) -> tuple[Response, int]:
        dto = parse_payload(ChangePasswordRequestDTO, request.get_json(silent=True))

        user_id = g.user.id
        try:
            self._change_password_use_case.execute(user_id, dto.current_password, dto.new_password)
        except InvalidCredentialsError:
            audit_log(
                AuditAction.PASSWORD_CHANGED,
                user_id=user_id,
                ip_address=current_client_ip(),
                details={"reason": "current_password_mismatch"},
                success=False,
            )
            raise

        audit_log(AuditAction.PASSWORD_CHANGED, user_id=user_id, ip_address=current_client_ip())
        return jsonify(AuthSuccessDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/login", endpoint="login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", endpoint="logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule(
            "/me", endpoint="me", view_func=self._guard.api()(self.me), methods=["GET"]
        )
        bp.add_url_rule(
            "/password",
            endpoint="change_password",
            view_func=self._guard.api()(self.change_password),
            methods=["POST"],
        )
        return bp
