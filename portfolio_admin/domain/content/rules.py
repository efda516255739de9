# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from .exceptions import FilenameRequiredError, InvalidFilenameError, InvalidFileTypeError

CONTENT_EXTENSION = ".mdx"
_FORBIDDEN_FRAGMENTS = ("..", "/", "\\")


def validate_content_filename(filename: str | None, extension: str = CONTENT_EXTENSION) -> str:
    """Return ``filename`` unchanged if it names a single content file.

    Names that are empty, lack the extension, or carry ``..``, ``/`` or ``\\``
    are rejected; nothing is normalised or stripped.
    """
    if not filename:
        raise FilenameRequiredError()
    if not filename.endswith(extension) or filename == extension:
        raise InvalidFileTypeError(context={"expected_extension": extension})
    if any(fragment in filename for fragment in _FORBIDDEN_FRAGMENTS):
        raise InvalidFilenameError()
    return filename


def is_valid_content_filename(filename: str | None, extension: str = CONTENT_EXTENSION) -> bool:
    try:
        validate_content_filename(filename, extension)
    except (FilenameRequiredError, InvalidFileTypeError, InvalidFilenameError):
        return False
    return True


__all__ = ["CONTENT_EXTENSION", "is_valid_content_filename", "validate_content_filename"]
