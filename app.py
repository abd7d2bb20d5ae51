"""
PrintStudio - Flask Application Entry Point.

This is a slim app factory that:
1. Configures logging
2. Builds the snapshot storage and the single CartStore
3. Builds the price calculator and the simulated AI image service
4. Registers route blueprints
5. Sets up error handlers

The store is owned here and reaches the routes through app.config; nothing
in the application holds it as a module-level global.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from flask import Flask, session
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from logging_config import setup_logging, get_logger
from core.exceptions import PrintStudioError
from core.storage import KeyValueStorage, create_storage
from modules.calculator import PriceCalculator
from modules.i18n import translate
from routes import register_blueprints
from services.cart_store import CartStore
from services.image_service import AIImageService


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(
    config_object: str = "config.Config",
    storage: Optional[KeyValueStorage] = None,
) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Import path of the configuration class
        storage: Snapshot storage to use instead of the configured backend
            (lets tests restart the app on the same storage)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting PrintStudio in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # STATE
    # =========================================================================

    if storage is None:
        storage = create_storage(
            app.config.get("STORAGE_BACKEND", "file"),
            app.config.get("STORAGE_DIR"),
        )

    cart_store = CartStore(
        storage,
        storage_name=app.config.get("CART_STORAGE_NAME", "cart-storage"),
        completion_days=app.config.get("ORDER_COMPLETION_DAYS", 3),
        enforce_transitions=app.config.get("ENFORCE_STATUS_TRANSITIONS", False),
    )
    app.config["CART_STORAGE"] = storage
    app.config["CART_STORE"] = cart_store
    logger.info("Cart store initialized")

    # =========================================================================
    # HELPERS
    # =========================================================================

    app.config["CALCULATOR"] = PriceCalculator()
    app.config["IMAGE_SERVICE"] = AIImageService(
        delay_seconds=app.config.get("AI_SIMULATED_DELAY_SECONDS", 2.0),
        success_rate=app.config.get("AI_SUCCESS_RATE", 0.7),
    )

    register_blueprints(app)

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    def _lang() -> str:
        return session.get("language", app.config.get("DEFAULT_LANGUAGE", "ru"))

    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(e):
        max_mb = app.config.get("MAX_CONTENT_LENGTH", 16 * 1024 * 1024) / (1024 * 1024)
        return {
            "error": "file_too_large",
            "message": translate("errors.file_too_large", lang=_lang(), max_mb=f"{max_mb:.0f}"),
        }, 413

    @app.errorhandler(404)
    def handle_not_found(e):
        return {"error": "not_found", "message": translate("errors.not_found", lang=_lang())}, 404

    @app.errorhandler(PrintStudioError)
    def handle_app_error(e):
        logger.warning(f"Unhandled application error: {e}")
        return e.to_dict(), e.status_code

    @app.errorhandler(Exception)
    def handle_server_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.error(f"500 error: {e}", exc_info=True)
        return {
            "error": "server_error",
            "message": translate("errors.server_error", lang=_lang()),
        }, 500

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
