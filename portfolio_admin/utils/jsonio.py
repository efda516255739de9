# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Whole-file JSON collections: forgiving reads, atomic writes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def read_json_list_of_dicts(path: str | Path) -> list[dict[str, Any]]:
    """Load a JSON array of objects.

    A missing file, unparsable content or a non-array payload reads as ``[]``,
    and array items that are not objects are skipped. Other ``OSError``s
    propagate so the caller can log them.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    except UnicodeDecodeError:
        return []
    try:
        loaded = json.loads(raw)
    except json.JSONDecodeError:
        return []
    if not isinstance(loaded, list):
        return []
    return [item for item in loaded if isinstance(item, dict)]


def write_json_list(path: str | Path, records: list[dict[str, Any]]) -> None:
    """Replace ``path`` with ``records`` so readers see either the old or the new file."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(records, fh, ensure_ascii=False, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


__all__ = ["read_json_list_of_dicts", "write_json_list"]
