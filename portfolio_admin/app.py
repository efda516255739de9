# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from portfolio_admin.container import Container
from portfolio_admin.infrastructure.admin_setup import setup_admin_user
from portfolio_admin.shared.config import AppConfig, load_config
from portfolio_admin.shared.logging import logger, setup_logging
from portfolio_admin.shared.middleware.error_handler import configure_error_handling
from portfolio_admin.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)
    setup_logging(
        level=config.log_level,
        log_file=config.log_file or config.storage.default_log_file,
        debug_mode=config.debug_logging,
    )

    config.storage.data_dir.mkdir(parents=True, exist_ok=True)
    setup_admin_user(container.credential_store, config)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=config.secret_key,
        TRUSTED_PROXIES=config.security.trusted_networks,
    )
    app.extensions["container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    origins = config.security.origins
    cors_kwargs: dict[str, object] = {"resources": {r"/api/*": {"origins": origins}}}
    if any(o != "*" for o in origins):
        cors_kwargs["supports_credentials"] = True
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.content_controller.as_blueprint())
    app.register_blueprint(container.admin_controller.as_blueprint())

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Cache-Control", "no-store")
        return resp

    logger.info(f"Flask app initialized env={config.app_env} data_dir={config.storage.data_dir}")
    return app


if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000, debug=True)
