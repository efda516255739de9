# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, NoReturn, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Flatten pydantic errors into ``{"fields": [...], "errors": [...]}``; input values are left out."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]) or "body",
            "type": error["type"],
            "message": error["msg"],
        }
        for error in exc.errors(include_url=False, include_input=False, include_context=False)
    ]
    return {"fields": sorted({e["field"] for e in errors}), "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


def parse_payload(model: type[ModelT], payload: Mapping[str, Any] | None) -> ModelT:
    """Validate a request body, turning pydantic failures into a 422 ``validation_error``."""
    try:
        return model.model_validate(payload or {})
    except PydanticValidationError as exc:
        raise_validation_error(exc)


__all__ = ["format_pydantic_errors", "parse_payload", "raise_validation_error"]
