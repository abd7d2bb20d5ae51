"""
Core module for PrintStudio.

Contains fundamental infrastructure components:
- exceptions: Custom exception hierarchy
- storage: Local key-value storage for the cart snapshot
"""

from .exceptions import (
    PrintStudioError,
    StorageError,
    OrderNotFoundError,
    InvalidStatusTransitionError,
    CheckoutValidationError,
    CalculatorError,
    ImageServiceError,
)
from .storage import KeyValueStorage, JSONFileStorage, MemoryStorage, create_storage

__all__ = [
    "PrintStudioError",
    "StorageError",
    "OrderNotFoundError",
    "InvalidStatusTransitionError",
    "CheckoutValidationError",
    "CalculatorError",
    "ImageServiceError",
    "KeyValueStorage",
    "JSONFileStorage",
    "MemoryStorage",
    "create_storage",
]
