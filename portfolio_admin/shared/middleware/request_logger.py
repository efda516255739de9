# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, g, request

from portfolio_admin.infrastructure.auth.client_address import current_client_ip
from portfolio_admin.shared.logging import clear_correlation_id, logger, set_correlation_id

_MASKED_HEADERS = frozenset({"authorization", "cookie", "x-csrf-token"})
_MASKED_ARG_FRAGMENTS = ("pass", "token", "secret", "key")


def _fingerprint(value: str) -> str:
    # Lets two log lines be matched without revealing the credential
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _safe_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _MASKED_HEADERS else value
        for name, value in request.headers.items()
    }


def _safe_args() -> dict[str, str]:
    return {
        name: "<redacted>" if any(f in name.lower() for f in _MASKED_ARG_FRAGMENTS) else value
        for name, value in request.args.items()
    }


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    """One line per request in, one per response out, tagged with ``X-Request-ID``."""

    @app.before_request
    def _on_request_start() -> None:
        set_correlation_id(request.headers.get("X-Request-ID") or secrets.token_hex(6))
        g.request_started = time.perf_counter()
        if debug_mode:
            logger.debug(
                f"--> {request.method} {request.path} ip={current_client_ip()} "
                f"args={_safe_args()} headers={_safe_headers()} "
                f"bytes={request.content_length or 0}"
            )
        else:
            logger.info(f"--> {request.method} {request.path} ip={current_client_ip()}")

    @app.after_request
    def _on_request_end(response):
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"<-- {request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id', '-')}"
        )
        return response

    @app.teardown_request
    def _on_teardown(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted by {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["configure_request_logging"]
