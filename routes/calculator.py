"""
Price calculator routes.

Quotes a print from material, size and quantity, and puts the quoted print
in the cart.
"""

from flask import Blueprint, current_app

from core.exceptions import CalculatorError
from modules.calculator import PriceCalculator
from logging_config import get_logger
from routes.common import (
    _, cart_payload, error_response, get_store, json_body, parse_quantity,
)


# Module logger
logger = get_logger(__name__)

calculator_bp = Blueprint("calculator", __name__)


def _get_calculator() -> PriceCalculator:
    return current_app.config["CALCULATOR"]


def _quote_from_request():
    data = json_body()
    quantity = data.get("quantity", 1)
    try:
        quantity = parse_quantity(quantity)
    except (TypeError, ValueError):
        raise CalculatorError("Quantity must be a whole number", "quantity", quantity)
    return _get_calculator().quote(
        str(data.get("material", "")), str(data.get("size", "")), quantity
    )


@calculator_bp.route("/api/calculator/options", methods=["GET"])
def options():
    """Materials and sizes to choose from."""
    return _get_calculator().options()


@calculator_bp.route("/api/calculator/quote", methods=["POST"])
def quote():
    """Price breakdown. Body: {material, size, quantity}"""
    try:
        price_quote = _quote_from_request()
    except CalculatorError as e:
        return error_response(e, _("calculator.invalid_option", field=e.field))
    return {"quote": price_quote.to_dict()}


@calculator_bp.route("/api/calculator/add-to-cart", methods=["POST"])
def add_to_cart():
    """Quote a print and add it to the cart as a ``print`` line."""
    try:
        price_quote = _quote_from_request()
    except CalculatorError as e:
        return error_response(e, _("calculator.invalid_option", field=e.field))

    store = get_store()
    item_id = store.add_item(PriceCalculator.to_line_item(price_quote))
    logger.debug(f"Calculator added {price_quote.size.key}/{price_quote.material.key}")

    payload = cart_payload(store)
    payload["itemId"] = item_id
    payload["quote"] = price_quote.to_dict()
    payload["message"] = _("calculator.added")
    return payload, 201
