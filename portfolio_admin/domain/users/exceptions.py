# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from portfolio_admin.shared.errors.base import DomainError


class UserNotFoundError(DomainError):
    error_code = "user_not_found"
    http_status = HTTPStatus.NOT_FOUND


class SessionNotFoundError(DomainError):
    error_code = "session_not_found"
    http_status = HTTPStatus.UNAUTHORIZED


class InvalidCredentialsError(DomainError):
    error_code = "invalid_credentials"
    http_status = HTTPStatus.UNAUTHORIZED


class InvalidTokenError(DomainError):
    error_code = "invalid_token"
    http_status = HTTPStatus.UNAUTHORIZED


class TokenExpiredError(DomainError):
    error_code = "token_expired"
    http_status = HTTPStatus.UNAUTHORIZED
