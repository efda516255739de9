# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from portfolio_admin.shared.logging import logger

from .base import AppError


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(app: Flask, *, debug_mode: bool = False) -> None:
    """JSON bodies for every ``AppError``; anything unexpected becomes a bare 500."""

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.is_server_error:
            logger.error(f"{exc.code} on {where} context={dict(exc.context or {})}")
        elif debug_mode:
            logger.debug(f"{exc.code} ({int(exc.status)}) on {where}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.path}"
        if debug_mode:
            logger.exception(
                f"Unhandled {type(exc).__name__} on {where} "
                f"ip={getattr(g, 'client_ip', request.remote_addr)} "
                f"user={getattr(g, 'user_id', None)}"
            )
        else:
            logger.error(f"Unhandled {type(exc).__name__} on {where}")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR


__all__ = ["error_response", "register_error_handler"]
