"""Helpers shared by the route blueprints."""

from typing import Any, Dict, Tuple

from flask import current_app, request, session

from core.exceptions import PrintStudioError
from modules.i18n import translate
from services.cart_store import CartStore


def get_store() -> CartStore:
    """The application's single cart store."""
    return current_app.config["CART_STORE"]


def current_language() -> str:
    return session.get("language", current_app.config.get("DEFAULT_LANGUAGE", "ru"))


def _(key: str, **kwargs) -> str:
    """Translate ``key`` into the session language."""
    return translate(key, lang=current_language(), **kwargs)


def json_body() -> Dict[str, Any]:
    """Request JSON, falling back to form fields; never None."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def cart_payload(store: CartStore) -> Dict[str, Any]:
    """Cart contents as returned by every cart endpoint."""
    return {
        "items": [item.to_dict() for item in store.items],
        "totalItems": store.get_total_items(),
        "totalPrice": store.get_total_price(),
        "isOpen": store.is_open,
    }


def error_response(error: PrintStudioError, message: str) -> Tuple[Dict[str, Any], int]:
    """JSON error body with a translated message."""
    body = error.to_dict()
    body["message"] = message
    return body, error.status_code


def parse_quantity(value: Any) -> int:
    """
    Whole-number quantity from a request value.

    Raises:
        TypeError: value is missing
        ValueError: value is not a whole number ("2.7", 2.7, True)
    """
    if isinstance(value, bool):
        raise ValueError("Quantity must be a whole number")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("Quantity must be a whole number")
        return int(value)
    return int(value)
