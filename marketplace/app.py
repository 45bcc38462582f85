# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask, Response
from flask_cors import CORS

from marketplace.infrastructure.container import Container
from marketplace.interfaces.http.security import configure_session_guard
from marketplace.shared.config import AppConfig, load_config
from marketplace.shared.logging import logger, setup_logging
from marketplace.shared.middleware.csrf import CSRF_HEADER, configure_csrf
from marketplace.shared.middleware.error_handler import configure_error_handling
from marketplace.shared.middleware.request_logger import REQUEST_ID_HEADER, configure_request_logging

_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cache-Control": "no-store",
}
_HSTS = "max-age=31536000; includeSubDomains"


def _configure_cors(app: Flask, config: AppConfig) -> None:
    origins = config.security.allowed_origins
    # Session and CSRF cookies are only sent cross-origin to explicitly listed origins.
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        expose_headers=[CSRF_HEADER, REQUEST_ID_HEADER],
        allow_headers=["Content-Type", CSRF_HEADER, REQUEST_ID_HEADER],
        supports_credentials="*" not in origins,
    )


def create_app(config: AppConfig | None = None, container: Container | None = None) -> Flask:
    config = config or load_config()
    container = container or Container(config)

    setup_logging(debug_mode=config.debug_logging)
    container.database.init_schema()

    app = Flask(__name__)
    app.config.update(SECRET_KEY=config.secret_key)
    app.extensions["marketplace.container"] = container

    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)
    configure_csrf(app, container.csrf_guard)
    configure_session_guard(app, container.session_guard)
    _configure_cors(app, config)

    for controller in (
        container.misc_controller,
        container.users_controller,
        container.auth_controller,
        container.listings_controller,
    ):
        app.register_blueprint(controller.as_blueprint())

    @app.after_request
    def _security_headers(resp: Response) -> Response:
        for name, value in _SECURITY_HEADERS.items():
            resp.headers.setdefault(name, value)
        if config.security.enable_hsts:
            resp.headers.setdefault("Strict-Transport-Security", _HSTS)
        return resp

    logger.info(
        f"{config.observability.service_name} ready: env={config.app_env} "
        f"sessions={config.session.backend} csrf={'on' if config.security.enable_csrf else 'off'}"
    )
    return app
