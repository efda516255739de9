# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# Applied in order; a JWT is masked before the generic key=value rules see it
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)[\w.-]{20,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"\b(scrypt|pbkdf2)(:[^\s'\"]*)?\$[^\s'\"]+"), rf"\1:{_REDACTED}"),
    (
        re.compile(r"((?:jwt_?|secret_?)(?:key|secret)\s*[:=]\s*['\"]?)[^'\"\s,}]{6,}", re.IGNORECASE),
        rf"\1{_REDACTED}",
    ),
    (
        re.compile(r"((?:auth_?)?token\s*[:=]\s*['\"]?)[\w.-]{20,}", re.IGNORECASE),
        rf"\1{_REDACTED}",
    ),
    (
        re.compile(
            r"((?:current_|new_)?pass(?:word|wd)['\"]?\s*[:=]\s*['\"]?)[^'\"]{6,}",
            re.IGNORECASE,
        ),
        rf"\1{_REDACTED}",
    ),
    (re.compile(r"((?:authorization|cookie)\s*:\s*['\"]?)[^'\"]{10,}", re.IGNORECASE), rf"\1{_REDACTED}"),
)


def sanitize_message(message: str) -> str:
    """Mask session tokens, password material and secrets in a log line."""
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru ``filter`` hook: rewrites the message in place and never drops the record."""
    message = record.get("message")
    if isinstance(message, str):
        record["message"] = sanitize_message(message)
    return True


__all__ = ["sanitize_message", "sanitize_record"]
