"""Entrypoint for running the relay.

Usage:
- python -m pinrelay.main
- FLASK_APP=pinrelay:create_app flask run --port 9000

Loads ``.env`` once; a missing or incomplete configuration aborts startup.
"""

from __future__ import annotations

import logging
import sys

from pinrelay import create_app
from pinrelay.config import Config, ConfigError
from pinrelay.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(env_file: str = ".env") -> None:
    setup_logging()
    try:
        cfg = Config.from_env(env_file)
    except ConfigError as e:
        logger.critical("%s", e)
        sys.exit(1)

    setup_logging(cfg.log_level)
    app = create_app(cfg)
    logger.info("Server is running on http://%s:%s", cfg.host, cfg.port)
    app.run(host=cfg.host, port=cfg.port, threaded=True)


if __name__ == "__main__":
    main()
