# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import atexit
import sys

from flask import Flask
from flask_cors import CORS
from pydantic import ValidationError
from pydantic_settings import SettingsError

from userservice.container import Container
from userservice.infrastructure.db import init_db
from userservice.shared.config import AppConfig, load_config
from userservice.shared.logging import logger, setup_logging
from userservice.shared.middleware.error_handler import configure_error_handling
from userservice.shared.middleware.request_logger import configure_request_logging


def create_app(config: AppConfig | None = None, *, container: Container | None = None) -> Flask:
    config = config or (container.config if container else load_config())
    container = container or Container(config)

    init_db(container.engine)

    app = Flask(__name__)
    configure_error_handling(app, debug_mode=config.debug_logging)
    configure_request_logging(app, debug_mode=config.debug_logging)

    CORS(app, resources={r"/*": {"origins": config.server.origins}})
    app.register_blueprint(container.misc_controller.as_blueprint())
    app.register_blueprint(container.users_controller.as_blueprint())
    app.extensions["userservice.container"] = container

    @app.after_request
    def _add_security_headers(resp):
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")
        return resp

    logger.info("Flask app initialized")
    return app


def main() -> None:
    try:
        config = load_config()
    except (ValidationError, SettingsError) as exc:
        setup_logging()
        logger.critical(f"invalid configuration, refusing to start: {exc}")
        sys.exit(1)

    setup_logging(config.log_level, log_file=config.log_file)
    container = Container(config)
    atexit.register(container.close)
    app = create_app(config, container=container)

    logger.info(f"starting web server on {config.server.host}:{config.server.port}")
    app.run(host=config.server.host, port=config.server.port, threaded=True)


if __name__ == "__main__":
    main()
