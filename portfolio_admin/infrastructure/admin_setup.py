# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from portfolio_admin.application.services.credential_store import CredentialStore
from portfolio_admin.shared.config import AppConfig
from portfolio_admin.shared.config.settings import DEFAULT_ADMIN_PASSWORD
from portfolio_admin.shared.errors import StorageError
from portfolio_admin.shared.logging import logger


class AdminSetupError(Exception):
    pass


def setup_admin_user(store: CredentialStore, config: AppConfig) -> bool:
    """Seed the default administrator when no users exist yet."""
    try:
        created = store.initialize_default_user(config.admin_password)
    except StorageError as e:
        logger.error(f"admin_setup: Failed to seed admin user: {e}")
        raise AdminSetupError(f"Failed to seed admin user: {e}") from e

    if not created:
        logger.info("admin_setup: users already present, skipping admin seeding")
        return False

    if config.admin_password == DEFAULT_ADMIN_PASSWORD:
        logger.warning(
            "admin_setup: seeded 'admin' with the default password, set ADMIN_PASSWORD "
            "or change it via /api/auth/password"
        )
    else:
        logger.info("admin_setup: seeded 'admin' with the configured ADMIN_PASSWORD")
    return True


__all__ = ["AdminSetupError", "setup_admin_user"]
