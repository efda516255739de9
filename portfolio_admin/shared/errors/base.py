# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Errors that render as ``{"error": <code>, "context": {...}}`` JSON bodies."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def is_server_error(self) -> bool:
        return self.status >= HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.code}
        if self.context:
            body["context"] = dict(self.context)
        return body


class DomainError(AppError):
    """Subclasses pin ``error_code`` and ``http_status``; callers only add context."""

    error_code: ClassVar[str] = "domain_error"
    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(code=cls.error_code, status=cls.http_status, context=context)


class StorageError(AppError):
    """A record collection could not be written."""

    def __init__(self, collection: str) -> None:
        super().__init__(
            code="storage_failure",
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            context={"collection": collection},
        )


class ValidationError(AppError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code="validation_error", status=HTTPStatus.UNPROCESSABLE_ENTITY, context=context
        )


class UnauthorizedError(AppError):
    """No usable credential; ``reason`` says which check failed."""

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            code="unauthorized",
            status=HTTPStatus.UNAUTHORIZED,
            context={"reason": reason} if reason else None,
        )


class ForbiddenError(AppError):
    def __init__(self, required_role: str) -> None:
        super().__init__(
            code="forbidden",
            status=HTTPStatus.FORBIDDEN,
            context={"required_role": required_role},
        )


__all__ = [
    "AppError",
    "DomainError",
    "ForbiddenError",
    "StorageError",
    "UnauthorizedError",
    "ValidationError",
]
