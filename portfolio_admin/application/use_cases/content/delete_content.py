# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.domain.content.exceptions import ContentNotFoundError
from portfolio_admin.domain.content.rules import CONTENT_EXTENSION, validate_content_filename
from portfolio_admin.infrastructure.storage import ContentStoragePort
from portfolio_admin.shared.logging import logger


class DeleteContentUseCase:
    def __init__(self, *, storage: ContentStoragePort) -> None:
        self._storage = storage

    def execute(self, filename: str | None, *, actor: str) -> str:
        name = validate_content_filename(filename)

        if not self._storage.exists(name):
            raise ContentNotFoundError(context={"filename": name})

        self._storage.delete(name)
        logger.info(f"content: deleted file={name} by user={actor}")
        return name


class ListContentUseCase:
    def __init__(self, *, storage: ContentStoragePort) -> None:
        self._storage = storage

    def execute(self) -> list[str]:
        return self._storage.list_files(CONTENT_EXTENSION)


__all__ = ["DeleteContentUseCase", "ListContentUseCase"]
