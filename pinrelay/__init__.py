"""Flask app factory and blueprint registration.

Defines ``create_app()`` to build the relay from an explicit ``Config``,
apply the upload size ceiling, and register route blueprints.
"""

from __future__ import annotations

from typing import Optional

import httpx
from flask import Flask

from pinrelay.config import Config
from pinrelay.routes.upload import upload_bp


def create_app(cfg: Optional[Config] = None, *, transport: Optional[httpx.BaseTransport] = None) -> Flask:
    """Create the relay app.

    ``cfg`` defaults to ``Config.from_env()``, which raises ``ConfigError``
    when the ``.env`` file is missing. ``transport`` replaces the outbound
    httpx transport and exists for tests.
    """
    if cfg is None:
        cfg = Config.from_env()

    app = Flask(__name__)
    app.config["PINRELAY"] = cfg
    app.config["PINATA_TRANSPORT"] = transport
    # Form parsing fails fast above this size
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_form_bytes

    app.register_blueprint(upload_bp)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app
