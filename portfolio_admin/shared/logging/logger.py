# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Loguru sinks for the admin backend.

Every record carries the request's correlation id, and every sink passes
through :func:`sanitize_record` so tokens and password material never reach
disk.
"""

from __future__ import annotations

import inspect
import logging
import sys
from contextvars import ContextVar
from pathlib import Path

from loguru import logger as _root_logger

from .sensitive_filter import sanitize_record

_LINE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="-")


def _attach_correlation_id(record) -> None:
    record["extra"].setdefault("correlation_id", _correlation_id.get())


logger = _root_logger.patch(_attach_correlation_id)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or "-")


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set("-")


class _StdlibBridge(logging.Handler):
    """Forward stdlib records (werkzeug, flask-cors) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame is not None and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(
    *,
    level: str | None = None,
    log_file: Path | None = None,
    debug_mode: bool = False,
) -> None:
    """Replace loguru's default sink with stderr plus a rotating file."""
    resolved_level = (level or ("DEBUG" if debug_mode else "INFO")).upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved_level,
        format=_LINE_FORMAT,
        filter=sanitize_record,
        colorize=True,
        backtrace=False,
        diagnose=False,
    )
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=resolved_level,
            format=_LINE_FORMAT,
            filter=sanitize_record,
            colorize=False,
            backtrace=False,
            diagnose=False,
            enqueue=True,
            rotation="10 MB",
            retention=5,
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO if debug_mode else logging.WARNING)


__all__ = [
    "clear_correlation_id",
    "get_correlation_id",
    "logger",
    "set_correlation_id",
    "setup_logging",
]
