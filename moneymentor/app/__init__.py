"""Application factory and app-wide configuration."""

import logging

from flask import Flask
from flask_cors import CORS

from moneymentor.app.api.routes import api_bp
from moneymentor.app.config import Config
from moneymentor.core.products import ProductCatalog


def create_app(config_class=Config) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
    )

    # product constants come from configuration, never from the routes
    app.extensions["product_catalog"] = ProductCatalog.from_mapping(app.config["PRODUCTS"])

    app.register_blueprint(api_bp, url_prefix="/api")
    app.logger.info(
        "MoneyMentor API v%s ready with %d products",
        app.config["VERSION"],
        len(app.extensions["product_catalog"]),
    )
    return app
