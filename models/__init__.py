"""
Data models for PrintStudio.

This module contains dataclasses for:
- NewItem / LineItem: cart rows before and after an id is assigned
- Order: placed order with an immutable item snapshot
- CustomerInfo: contact record captured at checkout
- OrderStatus: order lifecycle and its transition table
"""

from .cart_item import ItemType, NewItem, LineItem
from .order import Order, OrderStatus, CustomerInfo

__all__ = [
    # Cart models
    "ItemType",
    "NewItem",
    "LineItem",
    # Order models
    "Order",
    "OrderStatus",
    "CustomerInfo",
]
