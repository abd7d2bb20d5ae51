"""
Custom exceptions for PrintStudio.

Exception Hierarchy:
    PrintStudioError (base)
    ├── StorageError                 - Snapshot could not be read or written
    ├── OrderNotFoundError           - Unknown order identifier
    ├── InvalidStatusTransitionError - Status change outside the lifecycle
    ├── CheckoutValidationError      - Missing required contact fields
    ├── CalculatorError              - Unknown material/size or bad quantity
    └── ImageServiceError            - Image helper could not process input

Usage:
    The cart store itself never raises for unknown identifiers (those are
    no-ops). These errors are raised by collaborators around it and turned
    into JSON error responses by the routes.
"""

from typing import Optional, Dict, Any, List


class PrintStudioError(Exception):
    """
    Base exception for all PrintStudio errors.

    All custom exceptions inherit from this class, allowing callers to catch
    all application-specific errors with a single except clause if needed.
    """

    status_code = 400

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional context for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """JSON body for an error response."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class StorageError(PrintStudioError):
    """
    The cart snapshot could not be read from or written to storage.

    Persistence is best-effort: the store logs this error and keeps its
    in-memory state.
    """

    status_code = 500

    def __init__(self, name: str, operation: str, reason: str):
        message = f"Storage {operation} failed for '{name}': {reason}"
        details = {"name": name, "operation": operation}
        super().__init__(message, details)
        self.name = name
        self.operation = operation


class OrderNotFoundError(PrintStudioError):
    """No order with the requested identifier exists."""

    status_code = 404

    def __init__(self, order_id: str):
        super().__init__(f"Order not found: {order_id}", {"order_id": order_id})
        self.order_id = order_id


class InvalidStatusTransitionError(PrintStudioError):
    """
    Requested status change is not part of the order lifecycle.

    Only raised when the store runs with transition enforcement enabled.
    """

    status_code = 409

    def __init__(self, order_id: str, current: str, requested: str):
        message = f"Order {order_id} cannot move from '{current}' to '{requested}'"
        details = {
            "order_id": order_id,
            "current": current,
            "requested": requested,
        }
        super().__init__(message, details)
        self.order_id = order_id
        self.current = current
        self.requested = requested


class CheckoutValidationError(PrintStudioError):
    """Customer contact record is missing required fields."""

    def __init__(self, missing_fields: List[str]):
        message = f"Missing required fields: {', '.join(missing_fields)}"
        super().__init__(message, {"missing_fields": list(missing_fields)})
        self.missing_fields = list(missing_fields)


class CalculatorError(PrintStudioError):
    """Price calculator received an option it does not know."""

    def __init__(self, message: str, field: str, value: Any):
        super().__init__(message, {"field": field, "value": value})
        self.field = field
        self.value = value


class ImageServiceError(PrintStudioError):
    """The image helper could not process the supplied image."""

    def __init__(self, message: str, operation: str):
        super().__init__(message, {"operation": operation})
        self.operation = operation
