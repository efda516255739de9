# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any
from urllib.parse import quote

from flask import Request, g, redirect, request

from portfolio_admin.application.use_cases.auth.authorize_request import AuthorizeRequestUseCase
from portfolio_admin.shared.errors.base import AppError
from portfolio_admin.shared.logging import logger

USER_INFO_COOKIE = "user_info"


def extract_token(req: Request, cookie_name: str) -> str:
    token = req.cookies.get(cookie_name, "")
    if not token:
        auth_header = req.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            token = auth_header[7:].strip()
    return token


class AuthGuard:
    """Route decorators that resolve the caller from the session cookie or bearer header.

    ``api`` lets auth errors reach the JSON error handler (401/403);
    ``browser`` turns them into a redirect to the login page.
    """

    def __init__(
        self,
        *,
        authorize: AuthorizeRequestUseCase,
        cookie_name: str,
        login_path: str = "/admin/login",
        debug_mode: bool = False,
    ) -> None:
        self._authorize = authorize
        self._cookie_name = cookie_name
        self._login_path = login_path
        self._debug_mode = debug_mode

    @property
    def cookie_name(self) -> str:
        return self._cookie_name

    def _resolve(self, required_role: str | None) -> None:
        token = extract_token(request, self._cookie_name)
        try:
            user = self._authorize.execute(token, required_role)
        except AppError as exc:
            if self._debug_mode:
                logger.warning(
                    f"Access denied ({exc.code}) on {request.method} {request.path}"
                )
            raise
        g.user = user
        g.user_id = user.id
        if self._debug_mode:
            logger.debug(f"Auth OK: user={user.id} {request.method} {request.path}")

    def api(self, required_role: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                self._resolve(required_role)
                return func(*args, **kwargs)

            return wrapper

        return decorator

    def browser(self, required_role: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            @wraps(func)
            def wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self._resolve(required_role)
                except AppError:
                    target = request.full_path if request.query_string else request.path
                    response = redirect(f"{self._login_path}?return={quote(target, safe='')}")
                    response.delete_cookie(self._cookie_name, path="/")
                    response.delete_cookie(USER_INFO_COOKIE, path="/")
                    return response
                return func(*args, **kwargs)

            return wrapper

        return decorator


__all__ = ["AuthGuard", "USER_INFO_COOKIE", "extract_token"]
