"""
Service routes.

Handles:
- /health - Health check endpoint
"""

from flask import Blueprint, current_app

from core.exceptions import StorageError
from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """Health check endpoint with service status."""
    health_status = {
        "status": "ok",
        "environment": current_app.config.get("ENVIRONMENT", "unknown"),
        "checks": {}
    }

    # Check cart store and its storage
    store = current_app.config.get("CART_STORE")
    storage = current_app.config.get("CART_STORAGE")
    if store is None or storage is None:
        health_status["checks"]["cart_store"] = "not_available"
        health_status["status"] = "degraded"
    else:
        try:
            storage.get_item(current_app.config.get("CART_STORAGE_NAME", "cart-storage"))
            health_status["checks"]["cart_store"] = "ok"
        except StorageError as e:
            logger.warning(f"Health check: snapshot unreadable: {e}")
            health_status["checks"]["cart_store"] = "storage_unreadable"
            health_status["status"] = "degraded"

    # Check image service
    if current_app.config.get("IMAGE_SERVICE"):
        health_status["checks"]["image_service"] = "ok"
    else:
        health_status["checks"]["image_service"] = "not_available"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code
