"""
Flask route blueprints for PrintStudio.

This module contains all route handlers organized by functionality:
- main: Storefront data and language switch
- calculator: Print price quotes
- cart: Cart lines and checkout
- orders: Order lookup and status updates
- ai: Simulated AI image editor
- api: Health check

Each blueprint is registered with the Flask app in create_app().
"""

from .main import main_bp
from .calculator import calculator_bp
from .cart import cart_bp
from .orders import orders_bp
from .ai import ai_bp
from .api import api_bp

__all__ = [
    "main_bp",
    "calculator_bp",
    "cart_bp",
    "orders_bp",
    "ai_bp",
    "api_bp",
]


def register_blueprints(app):
    """
    Register all blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(main_bp)
    app.register_blueprint(calculator_bp)
    app.register_blueprint(cart_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(ai_bp)
    app.register_blueprint(api_bp)
