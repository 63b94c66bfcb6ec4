"""Flask application factory."""

from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify

from . import cli
from .config import BaseConfig, DevConfig
from .extensions import Services, build_services, init_services
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def create_app(
    config: Optional[BaseConfig] = None,
    *,
    services: Optional[Services] = None,
) -> Flask:
    """Build the JSON API around ``config`` (``DevConfig`` when omitted)."""

    cfg = config or DevConfig()
    setup_logging(cfg)

    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=cfg.SECRET_KEY,
        TESTING=getattr(cfg, "TESTING", False),
        TICKERFOLIO_CONFIG=cfg,
    )
    init_services(app, services or build_services(cfg))

    from .blueprints import auth, portfolios, stocks

    app.register_blueprint(auth.bp)
    app.register_blueprint(portfolios.bp)
    app.register_blueprint(stocks.bp)

    @app.get("/api/health")
    def health():
        return jsonify({"status": "ok"})

    @app.errorhandler(404)
    def not_found(_exc):
        return jsonify({"error": "NotFound", "message": "Resource not found"}), 404

    @app.errorhandler(500)
    def internal_error(exc):
        logger.error("Unhandled error: %s", exc)
        return jsonify({"error": "InternalError", "message": "Internal server error"}), 500

    cli.init_app(app)
    return app
