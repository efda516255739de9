# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from portfolio_admin.shared.errors.base import DomainError


class FilenameRequiredError(DomainError):
    error_code = "filename_required"
    http_status = HTTPStatus.BAD_REQUEST


class InvalidFileTypeError(DomainError):
    error_code = "invalid_file_type"
    http_status = HTTPStatus.BAD_REQUEST


class InvalidFilenameError(DomainError):
    error_code = "invalid_filename"
    http_status = HTTPStatus.BAD_REQUEST


class ContentNotFoundError(DomainError):
    error_code = "file_not_found"
    http_status = HTTPStatus.NOT_FOUND
