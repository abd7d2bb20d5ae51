"""
Order routes.

Orders are read-only except for their status, which staff move along the
pending -> processing -> ready -> completed lifecycle (or cancel).
"""

from flask import Blueprint

from core.exceptions import InvalidStatusTransitionError, OrderNotFoundError
from models.order import OrderStatus
from logging_config import get_logger
from routes.common import _, error_response, get_store, json_body


# Module logger
logger = get_logger(__name__)

orders_bp = Blueprint("orders", __name__)


@orders_bp.route("/api/orders", methods=["GET"])
def list_orders():
    """All orders, oldest first."""
    orders = get_store().list_orders()
    return {"orders": [order.to_dict() for order in orders]}


@orders_bp.route("/api/orders/<order_id>", methods=["GET"])
def get_order(order_id: str):
    """One order (confirmation page data)."""
    order = get_store().get_order(order_id)
    if order is None:
        return error_response(
            OrderNotFoundError(order_id), _("orders.not_found", order_id=order_id)
        )
    return {"order": order.to_dict()}


@orders_bp.route("/api/orders/<order_id>/status", methods=["PATCH", "POST"])
def update_status(order_id: str):
    """
    Change an order's status. Body: {status}

    Returns 404 for an unknown order, 400 for an unknown status and, when
    transition enforcement is on, 409 for a move outside the lifecycle.
    """
    status = json_body().get("status")
    try:
        status = OrderStatus(status)
    except ValueError:
        return {
            "error": "invalid_status",
            "message": _("orders.invalid_status", status=status),
        }, 400

    store = get_store()
    if store.get_order(order_id) is None:
        return error_response(
            OrderNotFoundError(order_id), _("orders.not_found", order_id=order_id)
        )

    try:
        store.update_order_status(order_id, status)
    except InvalidStatusTransitionError as e:
        logger.info(f"Status change rejected: {e}")
        return error_response(
            e, _("orders.invalid_transition", current=e.current, requested=e.requested)
        )

    return {
        "order": store.get_order(order_id).to_dict(),
        "message": _("orders.status_updated"),
    }
