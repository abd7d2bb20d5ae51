"""
Cart routes.

Handles:
- /api/cart              - Cart contents and totals; DELETE clears it
- /api/cart/items        - Add a line (merged with an equal line)
- /api/cart/items/<id>   - Change quantity or remove a line
- /api/cart/cartridges   - Add a catalog cartridge by sku
- /api/cart/toggle       - Show/hide the cart panel
- /api/checkout          - Validate contact fields and place the order
"""

import math

from flask import Blueprint

from core.exceptions import CheckoutValidationError
from models.cart_item import NewItem
from modules.catalog import cartridge_line_item
from modules.checkout import validate_customer_info
from modules.image_defaults import get_default_image
from logging_config import get_logger
from routes.common import (
    _, cart_payload, error_response, get_store, json_body, parse_quantity,
)


# Module logger
logger = get_logger(__name__)

cart_bp = Blueprint("cart", __name__)


@cart_bp.route("/api/cart", methods=["GET"])
def get_cart():
    """Current cart contents."""
    return cart_payload(get_store())


@cart_bp.route("/api/cart", methods=["DELETE"])
def clear_cart():
    """Empty the cart (orders are kept)."""
    store = get_store()
    store.clear_cart()
    payload = cart_payload(store)
    payload["message"] = _("cart.cleared")
    return payload


@cart_bp.route("/api/cart/items", methods=["POST"])
def add_item():
    """
    Add a line to the cart.

    Body: {type, name, description, price, quantity, options?, imageUrl?}
    """
    data = json_body()
    try:
        parse_quantity(data.get("quantity", 1))
        new_item = NewItem.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Rejected cart item: {e}")
        return {"error": "invalid_item", "message": _("errors.invalid_request")}, 400

    if (
        not new_item.name
        or not math.isfinite(new_item.price)
        or new_item.price < 0
        or new_item.quantity < 1
    ):
        return {"error": "invalid_item", "message": _("errors.invalid_request")}, 400

    if new_item.image_url is None:
        new_item.image_url = get_default_image(new_item.type)

    store = get_store()
    item_id = store.add_item(new_item)
    payload = cart_payload(store)
    payload["itemId"] = item_id
    payload["message"] = _("cart.item_added")
    return payload, 201


@cart_bp.route("/api/cart/cartridges", methods=["POST"])
def add_cartridge():
    """Add a cartridge offer from the catalog. Body: {sku, quantity?}"""
    data = json_body()
    sku = str(data.get("sku", ""))
    try:
        quantity = parse_quantity(data.get("quantity", 1))
    except (TypeError, ValueError):
        return {"error": "invalid_quantity", "message": _("cart.invalid_quantity")}, 400
    if quantity < 1:
        return {"error": "invalid_quantity", "message": _("cart.invalid_quantity")}, 400

    new_item = cartridge_line_item(sku, quantity)
    if new_item is None:
        return {"error": "not_found", "message": _("cart.unknown_cartridge", sku=sku)}, 404

    store = get_store()
    item_id = store.add_item(new_item)
    payload = cart_payload(store)
    payload["itemId"] = item_id
    payload["message"] = _("cart.item_added")
    return payload, 201


@cart_bp.route("/api/cart/items/<item_id>", methods=["PATCH", "PUT"])
def update_item(item_id: str):
    """
    Set a line's quantity. Body: {quantity}

    Zero or a negative quantity removes the line.
    """
    data = json_body()
    try:
        quantity = parse_quantity(data.get("quantity"))
    except (TypeError, ValueError):
        return {"error": "invalid_quantity", "message": _("cart.invalid_quantity")}, 400

    store = get_store()
    store.update_quantity(item_id, quantity)
    payload = cart_payload(store)
    payload["message"] = _("cart.quantity_updated" if quantity > 0 else "cart.item_removed")
    return payload


@cart_bp.route("/api/cart/items/<item_id>", methods=["DELETE"])
def remove_item(item_id: str):
    """Remove a line; unknown ids are ignored."""
    store = get_store()
    store.remove_item(item_id)
    payload = cart_payload(store)
    payload["message"] = _("cart.item_removed")
    return payload


@cart_bp.route("/api/cart/toggle", methods=["POST"])
def toggle_cart():
    """Flip cart-panel visibility."""
    store = get_store()
    return {"isOpen": store.toggle_cart()}


@cart_bp.route("/api/checkout", methods=["POST"])
def checkout():
    """
    Place an order from the current cart.

    Body: {name, email, phone, address?}. Required fields are checked here;
    the store itself accepts any contact record.
    """
    try:
        customer_info = validate_customer_info(json_body())
    except CheckoutValidationError as e:
        logger.info(f"Checkout rejected: {e}")
        return error_response(e, _("checkout.missing_fields"))

    store = get_store()
    order_id = store.create_order(customer_info)
    order = store.get_order(order_id)

    logger.info(f"Checkout complete: {order_id}")
    return {
        "orderId": order_id,
        "order": order.to_dict(),
        "message": _("checkout.order_placed", order_id=order_id),
        "note": _("checkout.contact_soon"),
    }, 201
